"""src/projscan/features/processing/handlers/catalog.py
What: Category handler that writes a markdown catalog of a category's files.
Why: Provide a working default handler so the pipeline is usable without content generators.
"""

from __future__ import annotations

from dataclasses import dataclass

from projscan.features.snapshot.domain.models import CategorySnapshot, FileRecord, ProjectSnapshot
from projscan.features.snapshot.usecases.ports import RemoteStorageGateway
from projscan.platform.logging import logger


@dataclass(frozen=True, slots=True)
class CatalogResult:
    """Outcome payload of ``CatalogHandler``."""

    category: str
    entries: int
    file: FileRecord | None = None
    message: str | None = None


class CatalogHandler:
    """Write ``<prefix><Category>_Catalog.md`` into the category folder.

    Empty categories produce a neutral result instead of an error.
    """

    def __init__(self, gateway: RemoteStorageGateway, *, prefix: str = "AI_") -> None:
        self._gateway: RemoteStorageGateway = gateway
        self._prefix: str = prefix

    def file_name(self, category_id: str) -> str:
        return f"{self._prefix}{category_id}_Catalog.md"

    async def __call__(self, category: CategorySnapshot, project: ProjectSnapshot) -> CatalogResult:
        if not category.files:
            return CatalogResult(
                category=category.category_id,
                entries=0,
                message=f"No files found in {category.category_id}",
            )

        content = self.render(category, project)
        record = await self._gateway.create_file(
            category.folder_ref,
            self.file_name(category.category_id),
            content,
            content_type="text/markdown",
        )
        logger.debug("Wrote %s (%d entries)", record.name, len(category.files))
        return CatalogResult(category=category.category_id, entries=len(category.files), file=record)

    def render(self, category: CategorySnapshot, project: ProjectSnapshot) -> str:
        """Render the markdown catalog for ``category``."""

        latest = category.latest_modified_at
        lines = [
            f"# {category.category_id} Catalog",
            "",
            f"- Project: {project.project_id}",
            f"- Scanned: {project.taken_at.isoformat()}",
            f"- Files: {len(category.files)}",
            f"- Last modified: {latest.isoformat() if latest else '-'}",
            "",
            "| Name | Type | Modified | Size |",
            "| --- | --- | --- | ---: |",
        ]
        for record in sorted(category.files.values(), key=lambda item: (item.name, item.id)):
            size = "-" if record.size_bytes is None else str(record.size_bytes)
            name = record.name.replace("|", "\\|")
            lines.append(f"| {name} | {record.content_type} | {record.modified_at.isoformat()} | {size} |")
        lines.append("")
        return "\n".join(lines)


__all__ = ["CatalogHandler", "CatalogResult"]

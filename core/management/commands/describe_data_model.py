"""Print the normalized field descriptors of a persisted data-view model."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from core.charting.metadata import transform_hierarchy_meta, transform_meta


class Command(BaseCommand):
    """Normalize a data-view model JSON file into field descriptors."""

    help = "Print the field descriptors built from a data-view model JSON file."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("model", help="Path to the data-view model JSON file.")
        parser.add_argument(
            "--flat",
            action="store_true",
            help="Flatten hierarchy groups into their fields instead of keeping them.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path: str = options["model"]
        try:
            model = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CommandError(f"Cannot read data-view model {path!r}: {exc.strerror}.") from exc

        try:
            metas = transform_meta(model) if options["flat"] else transform_hierarchy_meta(model)
        except ValueError as exc:
            raise CommandError(f"Invalid data-view model {path!r}: {exc}") from exc

        self.stdout.write(json.dumps(metas or [], ensure_ascii=False, indent=2))
        return None

"""Reconcile a saved chart config file against the config schema of a chart type."""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.charting.metadata import get_column_render_origin_name
from core.charting.schema import ChartConfig
from core.charting.snapshot_codec import decode_chart_config, encode_chart_config
from core.charting.transfer import reconcile_chart_configs
from core.charting.validator import validate_chart_data_configs


class Command(BaseCommand):
    """Transfer the fields and style values of a SOURCE config onto a TARGET config."""

    help = "Reconcile a SOURCE chart config JSON file against a TARGET chart config JSON file."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("target", help="Path to the TARGET chart config JSON (new chart type schema).")
        parser.add_argument("source", help="Path to the SOURCE chart config JSON (previously built config).")
        parser.add_argument(
            "--output",
            default=None,
            help="Write the reconciled config to this path instead of stdout.",
        )
        default_group = parser.add_mutually_exclusive_group()
        default_group.add_argument(
            "--use-default",
            dest="use_default",
            action="store_true",
            default=None,
            help="Fill style/setting nodes without a value from their default.",
        )
        default_group.add_argument(
            "--no-default",
            dest="use_default",
            action="store_false",
            help="Leave style/setting nodes without a value untouched.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        use_default: bool | None = options["use_default"]
        if use_default is None:
            use_default = bool(getattr(settings, "CHART_TRANSFER_USE_DEFAULT", True))

        target = _load_config(options["target"])
        source = _load_config(options["source"])

        transfer = reconcile_chart_configs(target, source, use_default=use_default)
        result = transfer.config or {}
        dropped = transfer.dropped

        encoded = encode_chart_config(result, indent=2)
        output: str | None = options["output"]
        if output:
            Path(output).write_text(encoded + "\n", encoding="utf-8")
            self.stdout.write(f"Wrote reconciled config to {output}.")
        else:
            self.stdout.write(encoded)

        for field in dropped:
            self.stderr.write(f"Dropped field: {get_column_render_origin_name(field)}")
        if "datas" in result:
            validation = validate_chart_data_configs(result["datas"])
            for message in validation.errors:
                self.stderr.write(f"ERROR: {message}")
            for message in validation.warnings:
                self.stderr.write(f"WARNING: {message}")
        self.stderr.write(f"[TRANSFER] dropped={len(dropped)} use_default={use_default}")
        return None


def _load_config(path: str) -> ChartConfig:
    """Read and decode a chart config file, raising CommandError on failure."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CommandError(f"Cannot read chart config {path!r}: {exc.strerror}.") from exc
    try:
        config = decode_chart_config(text)
    except ValueError as exc:
        raise CommandError(f"Invalid chart config {path!r}: {exc}") from exc
    if config is None:
        raise CommandError(f"Chart config {path!r} is empty.")
    return config

"""
Main entry point for racial_scaling.
Usage: python -m racial_scaling generate --min 0.5 --max 2.0 --step 0.1
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .core import BatchOrchestrator, TemplateStore
from .core.errors import RacialScalingError, ValidationError
from .core.generator import GenerationContext
from .core.models import GenerationOptions, ProgressUpdate
from .core.validators import validate_file_upload
from .merge import CollectionMerger, SortOrderMerger
from .settings import AppSettings, export_settings, import_settings
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser with the `generate` subcommand."""
    parser = argparse.ArgumentParser(
        prog="racial-scaling",
        description="Generate FFXIV racial height mods and merge them into Penumbra files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="INI settings file to use instead of the per-user store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log DEBUG messages to the console")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a batch of height mods")
    generate.add_argument("--min", dest="min_multiplier", type=float, help="Smallest multiplier")
    generate.add_argument("--max", dest="max_multiplier", type=float, help="Largest multiplier")
    generate.add_argument("--step", dest="step_increment", type=float, help="Multiplier increment")
    generate.add_argument("--no-min", action="store_true", help="Skip FemaleMinSize variants")
    generate.add_argument("--no-max", action="store_true", help="Skip FemaleMaxSize variants")
    generate.add_argument("--prefix", help="Folder-name prefix (letters, digits, '_' and '-')")
    generate.add_argument("--meta", type=Path, help="Metadata template (default built in)")
    generate.add_argument("--mod", type=Path, help="Manipulation template (default built in)")
    generate.add_argument("--output", type=Path, help="Archive path (default generated name)")
    generate.add_argument("--collection", type=Path, help="Penumbra collection file to update")
    generate.add_argument("--sort-order", type=Path, help="Penumbra sort_order.json to update")
    generate.add_argument("--target-path", help="Sort-order folder for the new mods")
    generate.add_argument(
        "--update-existing",
        action="store_true",
        default=None,
        help="Also move existing height mods to the target folder",
    )
    generate.add_argument("--import-settings", type=Path, help="Start from an exported settings file")
    generate.add_argument("--export-settings", type=Path, help="Write the used settings to a file or directory")
    return parser


def resolve_options(args: argparse.Namespace, settings: AppSettings) -> GenerationOptions:
    """Stored (or imported) options overridden by explicit flags."""
    if args.import_settings:
        options = import_settings(args.import_settings)
    else:
        options = settings.generation_options

    overrides = {
        key: getattr(args, key)
        for key in ("min_multiplier", "max_multiplier", "step_increment", "prefix")
        if getattr(args, key) is not None
    }
    if args.no_min:
        overrides["generate_min"] = False
    if args.no_max:
        overrides["generate_max"] = False
    return dataclasses.replace(options, **overrides)


def merged_output_path(source: Path, archive_path: Path) -> Path:
    """Where an updated document is written: next to the archive, same name.

    The input file itself is never overwritten.
    """
    target = archive_path.parent / source.name
    if target.resolve() == source.resolve():
        target = target.with_name(f"{source.stem}_updated{source.suffix}")
    return target


def check_input_files(*paths: Optional[Path]) -> None:
    """Reject input files that are missing, not .json or too large.

    Raises:
        ValidationError: Listing the problems of every rejected file
    """
    errors: List[str] = []
    for path in paths:
        if path is None:
            continue
        validation = validate_file_upload(path)
        errors.extend(f"{path}: {error}" for error in validation.errors)
    if errors:
        raise ValidationError(errors)


def log_progress(update: ProgressUpdate) -> None:
    logger = logging.getLogger(f"{__name__}.progress")
    if update.phase == "generating":
        logger.debug(f"{update.percentage:3d}% {update.details}")
    else:
        logger.info(f"{update.percentage:3d}% {update.message}")


def run_generate(args: argparse.Namespace, settings: AppSettings) -> int:
    """Generate, save and merge; returns the exit code."""
    logger = logging.getLogger(f"{__name__}.generate")
    check_input_files(args.meta, args.mod, args.collection, args.sort_order, args.import_settings)

    options = resolve_options(args, settings)
    templates = TemplateStore()
    templates.load_templates(args.meta, args.mod)

    orchestrator = BatchOrchestrator(GenerationContext(templates=templates))
    info = orchestrator.calculate_generation_info(options)
    logger.info(
        f"Planned {info['totalMods']} mods for {info['multiplierCount']} multipliers "
        f"(about {info['estimatedTime']}s)"
    )

    result = orchestrator.generate_all(options, templates, progress_sink=log_progress)
    archive_path = orchestrator.save_archive(args.output)
    settings.generation_options = options
    logger.info(
        f"Wrote {result.generated_count} mods to {archive_path} "
        f"({result.archive_info.get('sizeText', '?')})"
    )

    if args.collection:
        merger = CollectionMerger()
        document = merger.load(args.collection)
        merged = merger.merge(document, result.variants)
        target = merger.save(merged.document, merged_output_path(args.collection, archive_path))
        logger.info(
            f"Collection written to {target}: {merged.added} added, {merged.skipped} skipped"
        )

    if args.sort_order:
        if args.target_path is not None:
            settings.target_path = args.target_path
        if args.update_existing is not None:
            settings.update_existing = args.update_existing

        sort_merger = SortOrderMerger()
        document = sort_merger.load(args.sort_order)
        merged_order = sort_merger.merge(
            document,
            result.variants,
            target_path=settings.target_path,
            update_existing=settings.update_existing,
        )
        target = sort_merger.save(
            merged_order.document, merged_output_path(args.sort_order, archive_path)
        )
        logger.info(
            f"Sort order written to {target}: {merged_order.added} added, "
            f"{merged_order.skipped} skipped, {merged_order.updated} moved"
        )

    if args.export_settings:
        export_settings(args.export_settings, options, templates.get_template_info())

    summary = orchestrator.get_generation_summary()
    if summary:
        logger.debug(f"Generation summary: {summary}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")
    try:
        settings = AppSettings(file_path=args.config)
        setup_logging(settings, verbose=args.verbose)

        logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

        validation = settings.validate()
        if validation.warnings:
            logger.warning("Configuration warnings detected:")
            for warning in validation.warnings:
                logger.warning(f"  {warning}")

        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
            return 1

        if args.command == "generate":
            return run_generate(args, settings)
        return 1

    except RacialScalingError as e:
        logger.error(str(e))
        return 1
    except Exception:
        logger.exception("Unhandled exception in main")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Batch orchestrator.

Expands a multiplier range into (multiplier, variant) pairs, renders each
pair with the VariantGenerator, packs the results into an archive and
reports progress along the way.
"""

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..utils.events import process_events
from .archive import ArchiveWriter
from .errors import ArchiveError, GenerationError, RacialScalingError, ValidationError
from .formatters import format_multiplier, generate_multiplier_array
from .generator import GenerationContext, VariantGenerator
from .models import BatchResult, GeneratedVariant, GenerationOptions, ProgressUpdate
from .templates import TemplateStore
from .validators import validate_generation_options

ProgressSink = Callable[[ProgressUpdate], Any]

# Share of the progress bar used by generation; the rest covers archiving
GENERATION_PROGRESS_SHARE = 80
FINALIZING_PROGRESS = 90
MS_PER_MOD_ESTIMATE = 10


class BatchOrchestrator:
    """Runs generation batches, one at a time.

    The orchestrator owns the list of generated variants between runs; merge
    engines and the archive writer only read it.
    """

    def __init__(
        self,
        context: Optional[GenerationContext] = None,
        archive_writer: Optional[ArchiveWriter] = None,
        yield_hook: Callable[[], Any] = process_events,
    ):
        """Initialize the orchestrator.

        Args:
            context: Templates and race data; a fresh context when omitted
            archive_writer: Collaborator receiving the generated mods
            yield_hook: Called between iterations to keep a host UI responsive
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.context = context or GenerationContext()
        self.generator = VariantGenerator(self.context)
        self.archive_writer = archive_writer or ArchiveWriter()
        self.yield_hook = yield_hook

        self.options: Optional[GenerationOptions] = None
        self.generated_variants: List[GeneratedVariant] = []
        self.is_generating = False

    # === PLANNING ===

    def filter_multipliers(self, multipliers: List[float]) -> List[float]:
        """Drop multipliers that would push every race to the entry ceiling."""
        max_base = self.context.max_base_value
        limit = self.context.max_entry_value
        kept = [m for m in multipliers if m * max_base <= limit]
        if len(kept) != len(multipliers):
            self.logger.debug(
                f"Excluded {len(multipliers) - len(kept)} multipliers above {limit} / {max_base}"
            )
        return kept

    def calculate_generation_info(self, options: GenerationOptions) -> Dict[str, Any]:
        """Preview what a batch with these options would produce.

        Counts are based on the raw multiplier range, before the
        entry-ceiling filter.
        """
        multipliers = generate_multiplier_array(
            options.min_multiplier, options.max_multiplier, options.step_increment
        )
        variants = options.variants
        total_mods = len(multipliers) * len(variants)
        return {
            "multiplierCount": len(multipliers),
            "multipliers": multipliers,
            "totalMods": total_mods,
            "variants": variants,
            "estimatedTime": self.estimate_generation_time(total_mods),
        }

    @staticmethod
    def estimate_generation_time(total_mods: int) -> int:
        """Rough duration in seconds (about 10ms per mod, at least 1s)."""
        return max(1, round(total_mods * MS_PER_MOD_ESTIMATE / 1000))

    # === GENERATION ===

    def generate_all(
        self,
        options: GenerationOptions,
        templates: Optional[TemplateStore] = None,
        progress_sink: Optional[ProgressSink] = None,
    ) -> BatchResult:
        """Generate every (multiplier, variant) pair and pack them.

        Pairs are produced by ascending multiplier, MIN before MAX; the
        archive receives them in the same order.

        Args:
            options: Generation options
            templates: TemplateStore to render from; the context's store
                       when omitted
            progress_sink: Callable receiving ProgressUpdate instances

        Returns:
            BatchResult with the generated variants and archive info

        Raises:
            GenerationError: If a batch is already running or rendering fails
            ValidationError: If options or templates are invalid
            ArchiveError: If the archive fails validation
        """
        if self.is_generating:
            raise GenerationError("Generation already in progress")

        store = templates or self.context.templates
        self.is_generating = True
        try:
            self.generated_variants = []
            self.archive_writer.clear()
            self.options = options
            self._validate(options, store)

            candidates = generate_multiplier_array(
                options.min_multiplier, options.max_multiplier, options.step_increment
            )
            multipliers = self.filter_multipliers(candidates)
            variants = options.variants
            total_mods = len(multipliers) * len(variants)

            self._report(
                progress_sink,
                "initializing",
                0,
                "Initializing generation...",
                f"Preparing to generate {total_mods} mod variants",
            )
            self.logger.info(
                f"Generating {total_mods} mods for {len(multipliers)} multipliers "
                f"({', '.join(variants)})"
            )

            current = 0
            for multiplier in multipliers:
                for variant in variants:
                    current += 1
                    generated = self.generator.generate(
                        multiplier,
                        store.meta_template,
                        store.mod_template,
                        variant,
                        options.prefix,
                    )
                    self.generated_variants.append(generated)
                    self.archive_writer.add_variant(generated)

                    self._report(
                        progress_sink,
                        "generating",
                        math.floor(current / total_mods * GENERATION_PROGRESS_SHARE),
                        f"Generating mod {current} of {total_mods}",
                        f"Creating {variant} variant for multiplier {format_multiplier(multiplier)}",
                    )
                    self.yield_hook()

            self._report(
                progress_sink,
                "finalizing",
                FINALIZING_PROGRESS,
                "Finalizing ZIP file...",
                "Compressing and preparing download",
            )
            validation = self.archive_writer.validate()
            if not validation.is_valid:
                raise ArchiveError(f"ZIP validation failed: {', '.join(validation.errors)}")

            self._report(
                progress_sink,
                "complete",
                100,
                "Generation complete!",
                f"Successfully generated {len(self.generated_variants)} height mod variants",
            )
            self.logger.info(f"Generated {len(self.generated_variants)} height mod variants")

            return BatchResult(
                generated_count=len(self.generated_variants),
                variants=list(self.generated_variants),
                archive_info=validation.info,
            )

        except RacialScalingError as e:
            self.logger.error(f"Generation failed: {e}")
            self._discard_results()
            raise
        except Exception as e:
            self.logger.exception("Unexpected error during generation")
            self._discard_results()
            raise GenerationError(f"Generation failed: {e}") from e
        finally:
            self.is_generating = False

    def _validate(self, options: GenerationOptions, store: TemplateStore) -> None:
        """Aggregate option and template errors into one ValidationError."""
        errors = list(validate_generation_options(options).errors)
        errors.extend(store.validate_templates().errors)
        if errors:
            raise ValidationError(errors)

    def _report(
        self,
        sink: Optional[ProgressSink],
        phase: Any,
        percentage: int,
        message: str,
        details: str,
    ) -> None:
        if sink is None:
            return
        sink(ProgressUpdate(phase=phase, percentage=percentage, message=message, details=details))

    def _discard_results(self) -> None:
        self.generated_variants = []
        self.archive_writer.clear()

    # === RESULTS ===

    def save_archive(self, path: Optional[Path] = None) -> Path:
        """Save the generated archive; default file name when no path given.

        Raises:
            ArchiveError: If nothing was generated or the write fails
        """
        if not self.generated_variants:
            raise ArchiveError("No mods generated. Please generate mods first.")
        target = Path(path) if path else Path(self.generate_default_filename())
        return self.archive_writer.save(target)

    def generate_default_filename(self, now: Optional[datetime] = None) -> str:
        """Archive name like FFXIV_Height_Mods_MIN_MAX_0.5-2.0_2024-01-31_12_00_00.zip."""
        options = self.options or GenerationOptions()
        timestamp = (now or datetime.now()).strftime("%Y-%m-%d_%H_%M_%S")
        variants = "_".join(options.variants)
        value_range = f"{options.min_multiplier}-{options.max_multiplier}"
        return f"FFXIV_Height_Mods_{variants}_{value_range}_{timestamp}.zip"

    def get_generation_summary(self) -> Optional[Dict[str, Any]]:
        """Counts by variant and multiplier span of the last batch, None if empty."""
        if not self.generated_variants:
            return None

        multipliers = [v.multiplier for v in self.generated_variants]
        variant_counts: Dict[str, int] = {}
        for generated in self.generated_variants:
            variant_counts[generated.variant] = variant_counts.get(generated.variant, 0) + 1

        return {
            "totalMods": len(self.generated_variants),
            "variants": variant_counts,
            "multipliers": {
                "min": min(multipliers),
                "max": max(multipliers),
                "count": len(set(multipliers)),
            },
        }

    def reset(self) -> None:
        """Forget options, results and the archive."""
        self.is_generating = False
        self.options = None
        self.generated_variants = []
        self.archive_writer.clear()

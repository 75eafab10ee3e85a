"""Tests for the batch orchestrator."""

import zipfile
from datetime import datetime
from pathlib import Path
from typing import List

import pytest

from racial_scaling.core import BatchOrchestrator, GenerationContext, TemplateStore
from racial_scaling.core.errors import ArchiveError, GenerationError, ValidationError
from racial_scaling.core.models import GenerationOptions, ProgressUpdate


def _options(**overrides) -> GenerationOptions:
    values = dict(min_multiplier=0.5, max_multiplier=1.0, step_increment=0.5)
    values.update(overrides)
    return GenerationOptions(**values)


class TestGenerateAll:
    """Test complete generation batches."""

    def test_end_to_end_order(self, orchestrator: BatchOrchestrator, templates: TemplateStore) -> None:
        """Test pairs come out by ascending multiplier, MIN before MAX."""
        result = orchestrator.generate_all(_options(), templates)

        assert result.generated_count == 4
        assert [(v.multiplier, v.variant) for v in result.variants] == [
            (0.5, "MIN"),
            (0.5, "MAX"),
            (1.0, "MIN"),
            (1.0, "MAX"),
        ]
        assert orchestrator.archive_writer.get_folder_list() == [
            v.folder_name for v in result.variants
        ]
        assert result.archive_info["folderCount"] == 4
        assert result.archive_info["fileCount"] == 8
        assert not orchestrator.is_generating

    def test_uses_context_templates_by_default(self, orchestrator: BatchOrchestrator) -> None:
        result = orchestrator.generate_all(_options(generate_min=False))
        assert [v.variant for v in result.variants] == ["MAX", "MAX"]

    def test_single_variant(self, orchestrator: BatchOrchestrator) -> None:
        result = orchestrator.generate_all(_options(generate_max=False))
        assert [(v.multiplier, v.variant) for v in result.variants] == [(0.5, "MIN"), (1.0, "MIN")]

    def test_high_multipliers_excluded(self, orchestrator: BatchOrchestrator) -> None:
        """Test multipliers pushing any race past 512 are dropped."""
        options = _options(min_multiplier=1.0, max_multiplier=1000.0, step_increment=999.0)
        result = orchestrator.generate_all(options)

        multipliers = {v.multiplier for v in result.variants}
        assert multipliers == {1.0}
        assert 1000.0 not in multipliers

    def test_filter_multipliers(self, orchestrator: BatchOrchestrator) -> None:
        assert orchestrator.filter_multipliers([1.0, 400.0, 430.0, 1000.0]) == [1.0, 400.0, 430.0]

    def test_progress_reporting(self, orchestrator: BatchOrchestrator) -> None:
        """Test phases, bounds and monotonic percentages."""
        updates: List[ProgressUpdate] = []
        orchestrator.generate_all(_options(max_multiplier=2.0), progress_sink=updates.append)

        assert updates[0].phase == "initializing"
        assert updates[0].percentage == 0
        assert [u.phase for u in updates[-2:]] == ["finalizing", "complete"]
        assert [u.percentage for u in updates[-2:]] == [90, 100]

        generating = [u.percentage for u in updates if u.phase == "generating"]
        assert len(generating) == 8
        assert generating == sorted(generating)
        assert all(0 <= p <= 80 for p in generating)
        assert generating[-1] == 80

    def test_yield_hook_called_per_pair(self, templates: TemplateStore) -> None:
        calls: List[int] = []
        orchestrator = BatchOrchestrator(
            GenerationContext(templates=templates), yield_hook=lambda: calls.append(1)
        )
        orchestrator.generate_all(_options())
        assert len(calls) == 4

    def test_default_yield_hook_without_qt_application(self, templates: TemplateStore) -> None:
        """Test the Qt event hook is harmless when no application exists."""
        orchestrator = BatchOrchestrator(GenerationContext(templates=templates))
        assert orchestrator.generate_all(_options()).generated_count == 4


class TestBatchFailures:
    """Test validation and failure handling."""

    def test_validation_errors_aggregated(self) -> None:
        """Test option and template errors arrive in one ValidationError."""
        orchestrator = BatchOrchestrator(yield_hook=lambda: None)
        options = _options(generate_min=False, generate_max=False)

        with pytest.raises(ValidationError) as exc_info:
            orchestrator.generate_all(options)

        errors = exc_info.value.errors
        assert "Please select at least one variant type (MIN or MAX)" in errors
        assert "Meta template not loaded" in errors
        assert "Mod template not loaded" in errors
        assert not orchestrator.is_generating

    def test_concurrent_batch_rejected(self, orchestrator: BatchOrchestrator) -> None:
        """Test a second batch started from the progress sink fails fast."""
        nested_errors: List[Exception] = []

        def sink(update: ProgressUpdate) -> None:
            if update.phase == "initializing":
                try:
                    orchestrator.generate_all(_options())
                except GenerationError as e:
                    nested_errors.append(e)

        result = orchestrator.generate_all(_options(), progress_sink=sink)

        assert len(nested_errors) == 1
        assert "already in progress" in str(nested_errors[0])
        assert result.generated_count == 4
        assert not orchestrator.is_generating

    def test_failure_clears_state(self, orchestrator: BatchOrchestrator) -> None:
        """Test a failing sink discards results and clears the flag."""
        orchestrator.generate_all(_options())
        assert orchestrator.generated_variants

        def failing_sink(update: ProgressUpdate) -> None:
            if update.phase == "generating":
                raise RuntimeError("display went away")

        with pytest.raises(GenerationError, match="display went away"):
            orchestrator.generate_all(_options(), progress_sink=failing_sink)

        assert orchestrator.generated_variants == []
        assert orchestrator.archive_writer.entries == []
        assert not orchestrator.is_generating

        # Next batch runs normally
        assert orchestrator.generate_all(_options()).generated_count == 4

    def test_empty_batch_fails_archive_validation(self, templates: TemplateStore) -> None:
        """Test a batch whose every multiplier is filtered produces no archive."""
        context = GenerationContext(templates=templates, max_entry_value=0.1)
        orchestrator = BatchOrchestrator(context, yield_hook=lambda: None)

        with pytest.raises(ArchiveError, match="Archive is empty"):
            orchestrator.generate_all(_options())
        assert not orchestrator.is_generating


class TestBatchResults:
    """Test planning helpers and result access."""

    def test_calculate_generation_info(self, orchestrator: BatchOrchestrator) -> None:
        info = orchestrator.calculate_generation_info(GenerationOptions())
        assert info["multiplierCount"] == 16
        assert info["totalMods"] == 32
        assert info["variants"] == ["MIN", "MAX"]
        assert info["estimatedTime"] == 1

    def test_estimate_generation_time(self) -> None:
        assert BatchOrchestrator.estimate_generation_time(0) == 1
        assert BatchOrchestrator.estimate_generation_time(1000) == 10

    def test_default_filename(self, orchestrator: BatchOrchestrator) -> None:
        orchestrator.generate_all(_options())
        name = orchestrator.generate_default_filename(datetime(2024, 1, 31, 12, 5, 9))
        assert name == "FFXIV_Height_Mods_MIN_MAX_0.5-1.0_2024-01-31_12_05_09.zip"

    def test_summary(self, orchestrator: BatchOrchestrator) -> None:
        assert orchestrator.get_generation_summary() is None

        orchestrator.generate_all(_options(max_multiplier=2.0))
        summary = orchestrator.get_generation_summary()
        assert summary == {
            "totalMods": 8,
            "variants": {"MIN": 4, "MAX": 4},
            "multipliers": {"min": 0.5, "max": 2.0, "count": 4},
        }

    def test_save_archive(self, orchestrator: BatchOrchestrator, tmp_path: Path) -> None:
        orchestrator.generate_all(_options())
        path = orchestrator.save_archive(tmp_path / "out" / "mods.zip")

        with zipfile.ZipFile(path) as zf:
            names = zf.namelist()
        assert "[0500] Height MIN - 0.5x/meta.json" in names
        assert "[1000] Height MAX - 1x/default_mod.json" in names
        assert len(names) == 8

    def test_save_without_results(self, orchestrator: BatchOrchestrator, tmp_path: Path) -> None:
        with pytest.raises(ArchiveError):
            orchestrator.save_archive(tmp_path / "mods.zip")

    def test_reset(self, orchestrator: BatchOrchestrator) -> None:
        orchestrator.generate_all(_options())
        orchestrator.reset()
        assert orchestrator.generated_variants == []
        assert orchestrator.options is None
        assert orchestrator.archive_writer.get_folder_list() == []


class TestQtIntegration:
    """Test the Qt helpers used by the orchestrator."""

    def test_process_events_without_application(self) -> None:
        from PySide6.QtCore import QCoreApplication

        from racial_scaling.utils.events import process_events

        assert process_events() is (QCoreApplication.instance() is not None)

    def test_progress_emitter_as_sink(self, orchestrator: BatchOrchestrator) -> None:
        """Test progress can be delivered through a Qt signal."""
        from racial_scaling.utils.events import ProgressEmitter

        emitter = ProgressEmitter()
        received: List[ProgressUpdate] = []
        emitter.progress.connect(lambda update: received.append(update))

        orchestrator.generate_all(_options(), progress_sink=emitter)

        assert received[0].phase == "initializing"
        assert received[-1].percentage == 100

import time
from typing import Optional
from enum import Enum
import click
from tqdm import tqdm
from dataclasses import dataclass


class Phase(Enum):
    FETCHING = "📥 Fetching articles"
    CONVERTING = "📝 Converting to MDX"


@dataclass
class ExportStats:
    """Statistics for an export run."""
    fetched_count: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    start_time: float = None

    def __post_init__(self):
        if self.start_time is None:
            self.start_time = time.time()


class ProgressTracker:
    """Per-phase progress bars and the final export summary."""

    def __init__(self, verbose: bool = False, disable: bool = False):
        self.verbose = verbose
        self.disable = disable
        self.stats = ExportStats()
        self.current_phase: Optional[Phase] = None
        self.phase_progress: Optional[tqdm] = None

    def start_phase(self, phase: Phase, total: Optional[int] = None, description: str = ""):
        """Start a new phase of the export."""
        if self.phase_progress:
            self.phase_progress.close()

        self.current_phase = phase

        phase_desc = f"{phase.value}"
        if description:
            phase_desc += f" - {description}"

        self.phase_progress = tqdm(
            total=total,
            desc=phase_desc,
            unit="articles",
            colour="blue",
            leave=True,
            disable=self.disable
        )

        click.echo(f"\n{phase.value} (Phase {list(Phase).index(phase) + 1}/{len(Phase)})")

    def update_phase(self, amount: int = 1, description: str = ""):
        """Update the current phase progress."""
        if self.phase_progress:
            if description:
                self.phase_progress.set_description(f"{self.current_phase.value} - {description}")
            self.phase_progress.update(amount)

    def finish_phase(self, message: str = ""):
        """Close the current phase's progress bar."""
        if self.phase_progress:
            self.phase_progress.close()
            self.phase_progress = None
        if message:
            click.echo(f"✅ {message}")

    def record_fetched(self, count: int):
        self.stats.fetched_count = count

    def record_result(self, success: bool):
        if success:
            self.stats.succeeded_count += 1
        else:
            self.stats.failed_count += 1

    def show_summary(self, output_dir: str):
        """Print the succeeded/total summary."""
        elapsed = time.time() - self.stats.start_time
        total = self.stats.succeeded_count + self.stats.failed_count
        click.echo(f"\n🎉 Done. {self.stats.succeeded_count}/{total} articles converted in {elapsed:.1f}s")
        click.echo(f"   📥 Fetched: {self.stats.fetched_count} articles")
        if self.stats.failed_count:
            click.echo(f"   ❌ Failed: {self.stats.failed_count} (see log for details)")
        click.echo(f"   📁 Output directory: {output_dir}")

    def cleanup(self):
        """Clean up progress bars."""
        if self.phase_progress:
            self.phase_progress.close()
            self.phase_progress = None

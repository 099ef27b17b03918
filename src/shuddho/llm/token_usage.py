from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table

from ..logging import get_logger

logger = get_logger(__name__)


@dataclass
class GeminiTokenUsage:
    """Token counts reported by Gemini for a single ``generate_content`` call."""

    model: str
    prompt: int = 0
    cached: int = 0
    thoughts: int = 0
    output: int = 0
    total: int = 0

    @classmethod
    def from_metadata(cls, model: str, metadata: Any) -> "GeminiTokenUsage":
        """Build from ``response.usage_metadata``; absent counts are zero."""
        if metadata is None:
            return cls(model=model)
        return cls(
            model=model,
            prompt=getattr(metadata, "prompt_token_count", None) or 0,
            cached=getattr(metadata, "cached_content_token_count", None) or 0,
            thoughts=getattr(metadata, "thoughts_token_count", None) or 0,
            output=getattr(metadata, "candidates_token_count", None) or 0,
            total=getattr(metadata, "total_token_count", None) or 0,
        )

    @property
    def is_consistent(self) -> bool:
        # cached tokens are a subset of prompt tokens
        return self.prompt + self.thoughts + self.output == self.total

    def log(self) -> None:
        if self.total == 0:
            logger.debug("No usage metadata reported for model %s", self.model)
            return
        logger.info(
            "Token usage for %s: prompt=%d (cached=%d) thoughts=%d output=%d total=%d",
            self.model, self.prompt, self.cached, self.thoughts, self.output, self.total,
        )
        if not self.is_consistent:
            logger.warning("Discrepancy in the token counts, the usage information is not reliable")

    def as_table(self) -> Table:
        table = Table(
            title=f"[bold cyan]Gemini API Usage[/bold cyan]\n[dim]Model: {self.model}[/dim]",
            title_justify="center",
            header_style="bold magenta",
            border_style="blue",
        )
        table.add_column("Token Type", style="cyan", min_width=16)
        table.add_column("Count", style="green", justify="right", min_width=10)

        table.add_row("Prompt", f"{self.prompt:,}")
        table.add_row("  of which cached", f"{self.cached:,}")
        table.add_row("Thoughts", f"{self.thoughts:,}")
        table.add_row("Output", f"{self.output:,}")
        table.add_section()
        table.add_row("[bold]TOTAL[/bold]", f"[bold]{self.total:,}[/bold]")
        return table

    def print(self, console: Console | None = None) -> None:
        (console or Console(stderr=True)).print(self.as_table())

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .history import SearchHistoryEntry
from .session import LookupSession
from .word_details import WordDetails


TITLE = "শুদ্ধ উচ্চারণ"
STANDARD_BADGE = "১০০% বাংলা একাডেমি মানদণ্ড"

LABEL_NOTATION = "প্রমিত উচ্চারণ লিপি"
LABEL_IPA = "IPA লিপ্যন্তর"
LABEL_MEANING = "অর্থ"
LABEL_EXAMPLES = "উদাহরণ"
LABEL_RULES = "একাডেমি উচ্চারণের সূত্র"
LABEL_HISTORY = "রিসেন্ট সার্চ"
LABEL_START = "শুদ্ধ চর্চা শুরু করুন"
START_HINT = "বাংলা একাডেমির প্রমিত ব্যাকরণ অনুযায়ী সঠিক উচ্চারণ ও অর্থ জানুন।"

COPIED_MARK = "✓"


def render_header() -> RenderableType:
    title = Text(TITLE, style="bold", justify="center")
    badge = Text(STANDARD_BADGE, style="green", justify="center")
    return Group(title, badge)


def render_error(message: str) -> RenderableType:
    return Panel(Text(message, style="bold red"), border_style="red")


def render_result_card(details: WordDetails, copied: str | None = None) -> RenderableType:
    phonetics = Table.grid(padding=(0, 2))
    phonetics.add_column(style="dim")
    phonetics.add_column()
    phonetics.add_column()
    phonetics.add_row(
        LABEL_NOTATION,
        Text(f"[{details.pronunciation_notation}]", style="bold"),
        COPIED_MARK if copied == "notation" else "",
    )
    phonetics.add_row(
        LABEL_IPA,
        Text(f"/{details.ipa}/", style="italic blue"),
        COPIED_MARK if copied == "ipa" else "",
    )

    parts: list[RenderableType] = [
        Text(details.parts_of_speech, style="dim"),
        Text(details.word, style="bold"),
        phonetics,
        Text(""),
        Text(LABEL_MEANING, style="dim"),
        Text(details.meaning),
    ]

    if details.examples:
        parts.append(Text(""))
        parts.append(Text(LABEL_EXAMPLES, style="dim"))
        parts.extend(Text(f"• {example}", style="italic") for example in details.examples)

    if details.rules_applied:
        parts.append(Text(""))
        parts.append(Text(LABEL_RULES, style="dim yellow"))
        parts.extend(Text(f"- {rule}") for rule in details.rules_applied)

    return Panel(Group(*parts), border_style="blue", padding=(1, 2))


def _tokens(words: Sequence[str]) -> Text:
    text = Text()
    for index, word in enumerate(words, start=1):
        if index > 1:
            text.append("  ")
        text.append(f"{index}.", style="dim")
        text.append(f" {word}", style="bold")
    return text


def render_history(history: Sequence[SearchHistoryEntry]) -> RenderableType:
    return Group(Text(LABEL_HISTORY, style="dim"), _tokens([entry.word for entry in history]))


def render_suggestions(words: Sequence[str]) -> RenderableType:
    body = Group(
        Text(LABEL_START, style="bold", justify="center"),
        Text(START_HINT, style="dim", justify="center"),
        Text(""),
        _tokens(words),
    )
    return Panel(body, border_style="dim")


def render_session(session: LookupSession) -> RenderableType:
    """The whole screen for the current session state."""
    parts: list[RenderableType] = [render_header()]
    if session.error:
        parts.append(render_error(session.error))
    if session.result is not None and not session.loading:
        parts.append(render_result_card(session.result, session.copied))
    history = session.history
    if not session.loading and history:
        parts.append(render_history(history))
    if session.suggestions:
        parts.append(render_suggestions(session.suggestions))
    return Group(*parts)

from typing import Annotated

import typer
from rich.table import Table

from idiomfix.cli.common import configuration_failed, console
from idiomfix.core.engine import ConfigurationError
from idiomfix.core.matching import FixMode
from idiomfix.presets import PRESET_NAMES, preset_rule_ids
from idiomfix.rules import ALL_IDIOMS

_FIX_LABELS = {FixMode.CODE: "auto", FixMode.SUGGESTION: "suggestion", FixMode.NONE: "report"}


def list_rules(
    preset: Annotated[str | None, typer.Option(help="Only list the rules of this preset.")] = None,
) -> None:
    """List the available rules and the presets that enable them."""
    try:
        selected = set(preset_rule_ids(preset)) if preset is not None else None
    except ConfigurationError as exc:
        raise configuration_failed(str(exc)) from exc

    table = Table(show_lines=False)
    table.add_column("rule", no_wrap=True)
    table.add_column("fix", no_wrap=True)
    table.add_column("types", no_wrap=True)
    table.add_column("presets")
    table.add_column("description")
    count = 0
    for idiom in ALL_IDIOMS:
        if selected is not None and idiom.id not in selected:
            continue
        presets = [name for name in PRESET_NAMES if idiom.id in preset_rule_ids(name)]
        table.add_row(
            idiom.id,
            _FIX_LABELS[idiom.mode],
            "yes" if idiom.requires_types else "",
            ", ".join(presets),
            idiom.description,
        )
        count += 1
    console.print(table)
    console.print(f"({count} rules)")

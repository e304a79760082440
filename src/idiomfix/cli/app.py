import typer

from idiomfix.cli.check import check
from idiomfix.cli.rules import list_rules
from idiomfix.cli.watch import watch

app = typer.Typer(
    name="idiomfix",
    help="idiomfix: find and rewrite legacy JavaScript/TypeScript idioms.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("check")(check)
app.command("rules")(list_rules)
app.command("watch")(watch)


def main() -> None:
    app()

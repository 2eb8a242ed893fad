# plugins/system/entrypoint.py
from __future__ import annotations

from adminconsole.commands import CommandDescriptor, CommandResult, command
from adminconsole.interface import HostContext
from adminconsole.ui import clear_screen, escape_markup


# ---------- clear ----------
@command(
    name="clear",
    description="Clears the console screen.",
    example="clear",
)
def clear(args: list[str]) -> None:
    clear_screen()


COMMANDS = [clear]


# ---------- history ----------
def build_commands(context: HostContext) -> list[CommandDescriptor]:
    history = context.console.history

    def show_history(args: list[str]) -> CommandResult:
        entries = history.entries
        if args:
            try:
                count = int(args[0])
            except ValueError:
                return CommandResult(ok=False, message=f"Not a number: {escape_markup(args[0])}")
            if count <= 0:
                return CommandResult(ok=False, message="The count must be a positive number.")
            entries = entries[-count:]
        first = len(history.entries) - len(entries) + 1
        lines = [f"{number:>4}  {escape_markup(line)}" for number, line in enumerate(entries, first)]
        return CommandResult(message="\n".join(lines), data=list(entries))

    return [
        CommandDescriptor(
            name="history",
            description="Shows the lines entered in this session.",
            execute=show_history,
            usage="[count]",
            example="history 10",
        )
    ]

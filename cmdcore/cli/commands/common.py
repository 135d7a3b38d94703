# cmdcore/cli/commands/common.py
from __future__ import annotations
from rich.table import Table

from ...engine import Command, CommandBase


def _print_table(state, base: CommandBase) -> None:
    table = Table(show_header=True, header_style="bold")
    for h in ("Command", "Aliases", "Usage", "Flags"):
        table.add_column(h, no_wrap=True)
    table.add_column("Help")
    for name, variants in sorted(base.get_commands().items()):
        for cmd in variants:
            table.add_row(
                name,
                ", ".join(cmd.aliases),
                f"{name} {cmd.format}".strip(),
                " ".join(sorted(cmd.flags)),
                cmd.help,
            )
    state.console.print(table)


class Help(Command):
    name = 'help'
    aliases = ['?']
    format = '[command]'
    help = 'Show all commands, or the variants of one'

    def run(self, sender, args, flags) -> None:
        wanted = args.get('command')
        if wanted is None:
            _print_table(sender, self.command_base)
            return
        variants = self.command_base.get_command(wanted)
        if not variants:
            sender.reply(f"No such command: {wanted}")
            return
        for cmd in variants:
            sender.reply(f"{cmd.name} {cmd.format}".strip() + (f"  - {cmd.help}" if cmd.help else ""))


class Quit(Command):
    name = 'quit'
    aliases = ['exit', 'q']
    help = 'Exit the shell'

    def run(self, sender, args, flags) -> None:
        sender.running = False


class Flags(Command):
    name = 'flags'
    format = '[state]'
    help = 'Show or switch flag parsing: flags [on|off]'

    def run(self, sender, args, flags) -> None:
        base = self.command_base
        val = args.get('state')
        if val is not None:
            val = val.lower()
            if val not in ('on', 'off'):
                raise ValueError(f"expected 'on' or 'off', got {val!r}")
            base.process_flags = val == 'on'
        sender.reply(f"Flag parsing is {'on' if base.process_flags else 'off'}.")


class Alias(Command):
    name = 'alias'
    format = '<command> [aliases...]'
    help = 'Replace the aliases of a command (no aliases clears them)'

    def run(self, sender, args, flags) -> None:
        target = args['command']
        variants = [c for c in self.command_base.get_command(target) if c.name == target]
        if not variants:
            sender.reply(f"No such command: {target}")
            return
        new = args.get('aliases', '').split()
        for cmd in variants:
            cmd.set_aliases(new)
        sender.reply(f"{target}: aliases {', '.join(new) if new else '(none)'}")


class Op(Command):
    name = 'op'
    flags = ['r', 'revoke']
    help = 'Grant yourself admin (-r / --revoke to drop it)'

    def run(self, sender, args, flags) -> None:
        if 'r' in flags or 'revoke' in flags:
            sender.permissions.discard('admin')
            sender.reply("You are no longer an admin.")
        else:
            sender.permissions.add('admin')
            sender.reply("You are now an admin.")


def load_common_commands(base: CommandBase) -> None:
    for cls in (Help, Quit, Flags, Alias, Op):
        base.register_commands(cls())

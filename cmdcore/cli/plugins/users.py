# cmdcore/cli/plugins/users.py
from __future__ import annotations
from ...engine import Command, CommandTree


class WhoAmI(Command):
    name = 'whoami'
    help = 'Show your name and permissions'

    def run(self, sender, args, flags) -> None:
        perms = ', '.join(sorted(sender.permissions)) or '(none)'
        sender.reply(f"{sender.user} [{perms}]")


class Nick(Command):
    name = 'nick'
    aliases = ['name']
    format = '<name>'
    help = 'Change your name'

    def run(self, sender, args, flags) -> None:
        old, sender.user = sender.user, args['name']
        sender.reply(f"{old} is now known as {sender.user}")


class UserCommands(CommandTree):
    children = (WhoAmI, Nick)

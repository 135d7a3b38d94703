# cmdcore/cli/plugins/moderation.py
from __future__ import annotations
from ...engine import Command

_ADMIN = {'permission': 'admin'}


def _days(flags) -> int:
    raw = flags.get('days')
    if raw is None:
        return 0
    days = int(raw)
    if days < 0:
        raise ValueError(f"--days must be >= 0, got {days}")
    return days


class Ban(Command):
    name = 'ban'
    aliases = ['b']
    format = '<user>'
    flags = ['s', 'silent', 'days']
    attributes = _ADMIN
    help = 'Ban a user'

    def run(self, sender, args, flags) -> None:
        _announce(sender, args['user'], None, _days(flags), flags)


class BanWithReason(Command):
    # tried after Ban: same name, longer format
    name = 'ban'
    aliases = ['b']
    format = '<user> <reason...>'
    flags = ['s', 'silent', 'days']
    attributes = _ADMIN
    help = 'Ban a user and say why'

    def run(self, sender, args, flags) -> None:
        _announce(sender, args['user'], args['reason'], _days(flags), flags)


def _announce(sender, user, reason, days, flags) -> None:
    span = f" for {days} day(s)" if days else ""
    why = f": {reason}" if reason else ""
    msg = f"{user} was banned{span}{why}"
    if 's' in flags or 'silent' in flags:
        msg += " (silently)"
    sender.reply(msg)


class Kick(Command):
    name = 'kick'
    format = '<user> [reason...]'
    attributes = _ADMIN
    help = 'Kick a user'

    def run(self, sender, args, flags) -> None:
        reason = args.get('reason')
        sender.reply(f"{args['user']} was kicked" + (f": {reason}" if reason else ""))


class Say(Command):
    name = 'say'
    format = '<message...>'
    flags = ['l', 'loud', 'times']
    help = 'Repeat a message (-l loud, --times=N)'

    def run(self, sender, args, flags) -> None:
        msg = args['message']
        if 'l' in flags or 'loud' in flags:
            msg = msg.upper()
        times = int(flags.get('times') or 1)
        for _ in range(times):
            sender.reply(f"{sender.user}: {msg}")

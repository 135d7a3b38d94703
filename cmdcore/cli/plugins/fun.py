# cmdcore/cli/plugins/fun.py
from __future__ import annotations
import random
import re

from ...engine import command

_DICE_RE = re.compile(r"^(\d*)d(\d+)$", re.IGNORECASE)


class FunCommands:
    def __init__(self, rng: random.Random = None) -> None:
        self.rng = rng or random.Random()

    @command('echo', '[text...]', flags=['u'], help='Print the text back (-u upper-case)')
    def echo(self, sender, args, flags) -> None:
        text = args.get('text', '')
        sender.reply(text.upper() if 'u' in flags else text)

    @command('roll', '[dice]', aliases=['r'], help='Roll dice, e.g. roll 2d6 (default 1d6)')
    def roll(self, sender, args, flags) -> None:
        dice = args.get('dice', '1d6')
        m = _DICE_RE.match(dice)
        if not m:
            raise ValueError(f"Dice must look like NdM, got {dice!r}")
        count, sides = int(m.group(1) or 1), int(m.group(2))
        if not (1 <= count <= 100) or sides < 2:
            raise ValueError(f"Unreasonable dice: {dice}")
        rolls = [self.rng.randint(1, sides) for _ in range(count)]
        sender.reply(f"{dice}: {rolls} = {sum(rolls)}")

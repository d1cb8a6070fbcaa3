import asyncio
import logging
import random
from collections import deque
from typing import List, Optional, Sequence, Tuple

import discord
from discord.ext import commands

from .config.config import Config
from .games.expression_parser import ExpressionParser
from .games.rounds import generate_numbers, generate_target
from .games.solver import CountdownSolver
from .utils.helpers import send_chunked_message

logger = logging.getLogger(__name__)

# Searching more numbers than a real round takes far too long
MAX_NUMBERS = 6


def parse_round(text: Optional[str]) -> Tuple[int, List[int]]:
    """
    Parse "<target> <n1> <n2> ..." into the target and the numbers.

    Raises:
        ValueError: If the text is not a target followed by 2 to 6 numbers
    """
    parts = (text or '').replace(',', ' ').split()
    if len(parts) < 3:
        raise ValueError("Usage: `<target> <n1> <n2> ...` with at least two numbers")
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise ValueError("Target and numbers must be whole numbers") from None
    if any(v <= 0 for v in values):
        raise ValueError("Target and numbers must be positive")
    target, numbers = values[0], values[1:]
    if len(numbers) > MAX_NUMBERS:
        raise ValueError(f"At most {MAX_NUMBERS} numbers are allowed")
    return target, numbers


def format_solutions(target: int, numbers: Sequence[int], solutions: Sequence[str],
                     limit: int) -> str:
    """Build the reply listing the distinct solutions of a round."""
    header = f"**Numbers:** {' '.join(map(str, numbers))}  **Target:** {target}"
    if not solutions:
        return f"{header}\nNo solutions."

    lines = [header, f"There are {len(solutions)} 'distinct' solutions:"]
    lines.extend(f"`{s} = {target}`" for s in solutions[:limit])
    if len(solutions) > limit:
        lines.append(f"... and {len(solutions) - limit} more")
    return '\n'.join(lines)


class SolverBot(commands.Bot):
    def __init__(self, config: Config):
        intents = discord.Intents.default()
        intents.message_content = True  # Needed to read command arguments

        super().__init__(command_prefix=config.command_prefix, intents=intents)
        self.config = config
        self.solver = CountdownSolver()
        self.parser = ExpressionParser()
        self.rng = random.Random()

        # Message deduplication buffer
        self.processed_messages = deque(maxlen=100)

        # Command handlers dictionary
        self.command_handlers = {
            'solve': self._handle_solve,
            'check': self._handle_check,
            'round': self._handle_round,
        }

    async def setup_hook(self):
        """Called once before the bot connects"""
        self.add_commands()

    async def on_ready(self):
        logger.info("Logged in as %s (ID: %s)", self.user, self.user.id)
        await self.change_presence(
            activity=discord.Activity(
                type=discord.ActivityType.watching,
                name=f"for {self.config.command_prefix}solve"
            )
        )

    def add_commands(self):
        """Register commands using the command handlers dictionary"""
        for cmd_name, handler in self.command_handlers.items():
            # Create a closure that properly captures the handler
            def make_callback(h):
                async def callback(ctx, *, arg=None):
                    logger.debug("Command %s invoked by %s", ctx.command, ctx.author)
                    await h(ctx, arg)
                return callback

            self.add_command(commands.Command(make_callback(handler), name=cmd_name))

        logger.debug("Registered commands: %s", ', '.join(c.name for c in self.commands))

    async def _run_solver(self, target: int, numbers: List[int]) -> Optional[List[str]]:
        """Solve in a worker thread. Returns None if the deadline passes."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.solver.solve, target, numbers),
                timeout=self.config.solve_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Solving %s for %s timed out", numbers, target)
            return None

    async def _handle_solve(self, ctx, args=None):
        """Handle the solve command
        Usage: !solve <target> <n1> <n2> ...
        """
        try:
            target, numbers = parse_round(args)
        except ValueError as e:
            await ctx.send(str(e))
            return

        async with ctx.typing():
            solutions = await self._run_solver(target, numbers)

        if solutions is None:
            await ctx.send("Sorry, that took too long to solve.")
            return

        message = format_solutions(target, numbers, solutions, self.config.max_solutions_shown)
        await send_chunked_message(ctx.channel, message, reference=ctx.message)

    async def _handle_check(self, ctx, args=None):
        """Handle the check command
        Usage: !check <target> <n1> <n2> ... = <expression>
        """
        if not args or '=' not in args:
            await ctx.send("Usage: `<target> <n1> <n2> ... = <expression>`")
            return

        round_text, expression = args.split('=', 1)
        try:
            target, numbers = parse_round(round_text)
        except ValueError as e:
            await ctx.send(str(e))
            return

        result = self.parser.parse_and_validate(expression, numbers)
        if not result['valid']:
            await ctx.send(f"Invalid answer: {result['error']}")
            return

        distance = abs(target - result['result'])
        if distance == 0:
            await ctx.send(f"Correct! `{expression.strip()}` = {target}")
        else:
            await ctx.send(f"`{expression.strip()}` = {result['result']}, {distance} away from {target}")

    async def _handle_round(self, ctx, args=None):
        """Handle the round command - draws random numbers and a target"""
        rules = self.config.rules
        numbers, _, _ = generate_numbers(rules, self.rng)
        target = generate_target(rules, self.rng)

        async with ctx.typing():
            solutions = await self._run_solver(target, numbers)

        lines = [f"**Numbers:** {' '.join(map(str, numbers))}  **Target:** {target}"]
        if solutions is None:
            lines.append("The solver ran out of time on this one.")
        elif solutions:
            lines.append(f"Solvable in {len(solutions)} 'distinct' ways, "
                         f"try `{self.config.command_prefix}solve {target} {' '.join(map(str, numbers))}`")
        else:
            lines.append("No exact solution exists for this round.")
        await ctx.send('\n'.join(lines))

    async def on_message(self, message: discord.Message):
        """Called when a message is received"""
        if message.author == self.user:
            return

        # Deduplication check to prevent double command execution
        if message.id in self.processed_messages:
            return
        self.processed_messages.append(message.id)

        await self.process_commands(message)

    async def on_command_error(self, ctx, error):
        if isinstance(error, commands.CommandNotFound):
            return
        logger.error("Command %s failed: %s", ctx.command, error)
        await ctx.send(f"Error: {error}")

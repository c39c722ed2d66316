"""Evaluation drivers built on the single-step relation.

- `evaluate` steps a program synchronously until no step occurs. There is
  no iteration bound: a program that does not terminate keeps the caller busy.
- The async drivers perform exactly one step, then yield to the asyncio
  event loop with `asyncio.sleep(0)` before deciding whether to continue.
  After every yield they check their Session and stop with
  EvaluationCancelled once a newer prepare has invalidated it.
"""

from __future__ import annotations

import asyncio
import logging
from itertools import count
from typing import AsyncIterator, Optional

from stepwise import Expression
from stepwise.errors import EvaluationCancelled
from stepwise.evaluation.stepper import step, step_program
from stepwise.types.environment import Environment
from stepwise.types.macro_environment import MacroEnvironment

logger = logging.getLogger(__name__)

_session_ids = count(1)


class Session:
    """One prepared evaluation run. Cancelling it stops any driver bound to it."""

    __slots__ = ("id", "cancelled")

    def __init__(self):
        self.id = next(_session_ids)
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def check(self) -> None:
        if self.cancelled:
            raise EvaluationCancelled(f"Evaluation session {self.id} was cancelled")

    def __repr__(self):
        return f"<Session {self.id}{' cancelled' if self.cancelled else ''}>"


def evaluate(program: list, env: Environment, macros: MacroEnvironment) -> list:
    """Step `program` to its fixpoint and return the final values."""
    steps = 0
    stepped = True
    while stepped:
        stepped, program = step_program(program, env, macros)
        steps += stepped
    logger.debug("Program reached its fixpoint after %d step(s)", steps)
    return program


def evaluate_expression(expr: Expression, env: Environment, macros: MacroEnvironment) -> Expression:
    """Step a single expression to its fixpoint."""
    stepped = True
    while stepped:
        stepped, expr = step(expr, env, macros)
    return expr


async def step_async(
    program: list,
    env: Environment,
    macros: MacroEnvironment,
    session: Optional[Session] = None,
) -> tuple[bool, list]:
    """One step, then one deferred re-entry through the event loop."""
    if session is not None:
        session.check()
    result = step_program(program, env, macros)
    await asyncio.sleep(0)
    if session is not None:
        session.check()
    return result


async def iter_steps(
    program: list,
    env: Environment,
    macros: MacroEnvironment,
    session: Optional[Session] = None,
) -> AsyncIterator[list]:
    """Yield every intermediate program until no further step occurs."""
    while True:
        stepped, program = await step_async(program, env, macros, session)
        if not stepped:
            return
        yield program


async def evaluate_async(
    program: list,
    env: Environment,
    macros: MacroEnvironment,
    session: Optional[Session] = None,
) -> list:
    """Trampolined counterpart of `evaluate`."""
    steps = 0
    stepped = True
    while stepped:
        stepped, program = await step_async(program, env, macros, session)
        steps += stepped
    logger.debug("Async program reached its fixpoint after %d step(s)", steps)
    return program

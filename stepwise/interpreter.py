from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal, Optional

from stepwise import Expression
from stepwise import config
from stepwise.builtin.env_builtin import build_builtins
from stepwise.builtin.macro_builtin import build_macros
from stepwise.errors import StepwiseError
from stepwise.evaluation.evaluator import Session, evaluate, evaluate_async, iter_steps, step_async
from stepwise.evaluation.stepper import step_program
from stepwise.printer import stringify_program
from stepwise.reader.parser import tokenize
from stepwise.types.environment import Environment

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """The structured outcome of evaluate_all / step_once."""
    status: Literal['success', 'error']
    value: Optional[list] = None
    stepped: bool = False
    error_message: Optional[str] = None
    error: Optional[StepwiseError] = None

    @property
    def ok(self) -> bool:
        return self.status == 'success'

    @property
    def text(self) -> str:
        """The value as displayed: one line per top-level form."""
        if self.value is None:
            return ""
        return stringify_program(self.value)

    def format_error(self) -> str:
        if self.status != 'error':
            return ""
        kind = type(self.error).__name__ if self.error is not None else "Error"
        return f"{kind}: {self.error_message or 'Unknown error'}"


def _failure(e: StepwiseError) -> EvaluationResult:
    return EvaluationResult(status='error', error_message=str(e), error=e)


class Interpreter:
    """
    Orchestrates reading, preparing and stepping stepwise programs.

    The built-in layer and macro table are built once per Interpreter. Every
    prepare discards the user layer, and cancels any stepping still in flight,
    before loading the definitions into a fresh one.
    """

    def __init__(self, strict: bool | None = None):
        self.builtins: Environment = build_builtins()
        self.macros = build_macros()
        self.env: Environment = Environment(outer=self.builtins)
        self.session = Session()
        self.strict = config.get_strict_reader() if strict is None else strict
        self.active_tasks: set[asyncio.Task] = set()

    def read(self, source: str) -> list:
        return tokenize(source, strict=self.strict)

    # ----------------- Preparation -----------------
    def prepare(self, definitions: str = "", expression: str = "") -> list:
        """Reset the user layer, evaluate `definitions` into it and read `expression`.

        Raises StepwiseError if the definitions fail.
        """
        self.cancel()
        self.session = Session()
        self.env = Environment(outer=self.builtins)
        logger.debug("Prepared %r", self.session)
        if definitions:
            evaluate(self.read(definitions), self.env, self.macros)
        return self.read(expression)

    def cancel(self) -> int:
        """Invalidate the current session and cancel tracked background tasks."""
        self.session.cancel()
        count = len(self.active_tasks)
        for task in list(self.active_tasks):
            task.cancel()
        self.active_tasks.clear()
        return count

    # ----------------- Synchronous drivers -----------------
    def evaluate_all(self, program: list) -> EvaluationResult:
        try:
            values = evaluate(program, self.env, self.macros)
        except StepwiseError as e:
            logger.debug("Evaluation failed: %s", e)
            return _failure(e)
        return EvaluationResult(status='success', value=values)

    def step_once(self, program: list) -> EvaluationResult:
        try:
            stepped, program = step_program(program, self.env, self.macros)
        except StepwiseError as e:
            logger.debug("Step failed: %s", e)
            return _failure(e)
        return EvaluationResult(status='success', value=program, stepped=stepped)

    def run(self, definitions: str, expression: str) -> EvaluationResult:
        """prepare followed by evaluate_all, reporting failures of either."""
        try:
            program = self.prepare(definitions, expression)
        except StepwiseError as e:
            return _failure(e)
        return self.evaluate_all(program)

    def eval(self, code: str) -> Expression:
        """Evaluate `code` in the current user layer; returns the last value, raising on failure."""
        values = evaluate(self.read(code), self.env, self.macros)
        return values[-1] if values else None

    # ----------------- Asynchronous drivers -----------------
    async def step_once_async(self, program: list) -> EvaluationResult:
        try:
            stepped, program = await step_async(program, self.env, self.macros, self.session)
        except StepwiseError as e:
            return _failure(e)
        return EvaluationResult(status='success', value=program, stepped=stepped)

    async def evaluate_all_async(self, program: list) -> EvaluationResult:
        try:
            values = await evaluate_async(program, self.env, self.macros, self.session)
        except StepwiseError as e:
            return _failure(e)
        return EvaluationResult(status='success', value=values)

    def iter_steps(self, program: list):
        """Async iterator over every intermediate program of the current session."""
        return iter_steps(program, self.env, self.macros, self.session)

    def run_in_background(self, program: list) -> asyncio.Task:
        """Schedule evaluate_all_async as a task that the next prepare cancels."""
        task = asyncio.create_task(self.evaluate_all_async(program))
        self.active_tasks.add(task)
        # Remove as soon as the task completes
        task.add_done_callback(lambda t: self.active_tasks.discard(t))
        return task

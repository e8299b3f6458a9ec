"""Screen-state controller for one run of the quiz.

Every user action is a method on :class:`QuizSession`. Actions that kick off a
generation call switch to the loading screen immediately and return the
:class:`asyncio.Task` doing the work, so callers may either await it or let it
finish in the background while the front end polls :meth:`QuizSession.view`.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Coroutine, List, Optional, Protocol, Set

from app.models.quiz import AgeBand, Gender, Question, QuizResult
from app.models.screens import (
    AgeView,
    ErrorView,
    GenderView,
    ImageResultView,
    LoadingView,
    OnboardingView,
    QuizView,
    ResultsView,
    Screen,
    ScreenView,
)
from app.services.prompts import (
    ANALYSIS_FAILED_MESSAGE,
    ANALYSIS_LOADING_MESSAGES,
    IMAGE_FAILED_MESSAGE,
    IMAGE_LOADING_MESSAGES,
    QUESTION_LOADING_MESSAGE,
    QUESTIONS_FAILED_MESSAGE,
)

logger = logging.getLogger("neonlove")


class QuizGenerator(Protocol):
    async def generate_questions(self, gender: Gender, age: AgeBand) -> List[Question]:
        ...

    async def analyze_answers(
        self,
        gender: Gender,
        age: AgeBand,
        questions: List[Question],
        answers: List[Optional[int]],
    ) -> QuizResult:
        ...

    async def generate_image(self, result: QuizResult, gender: Gender, age: AgeBand) -> str:
        ...


class QuizSessionError(Exception):
    """Base class for rejected user actions."""


class InvalidTransition(QuizSessionError):
    """The action is not available on the current screen."""


class InvalidSelection(QuizSessionError):
    """The chosen option does not exist for the current question."""


class QuizSession:
    def __init__(
        self,
        generator: QuizGenerator,
        feedback_delay: float = 0.4,
        image_prompt_delay: float = 10.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.generator = generator
        self.feedback_delay = feedback_delay
        self.image_prompt_delay = image_prompt_delay
        self._rng = rng or random.Random()
        self._tasks: Set[asyncio.Task] = set()
        self._advance_pending = False
        self._reset_fields()

    def _reset_fields(self) -> None:
        self.screen = Screen.ONBOARDING
        self.gender: Optional[Gender] = None
        self.age: Optional[AgeBand] = None
        self.questions: List[Question] = []
        self.answers: List[Optional[int]] = []
        self.current_index = 0
        self.result: Optional[QuizResult] = None
        self.image_url = ""
        self.error = ""
        self.loading_message = ""
        self.show_image_prompt = False
        self.prompt_answered = False

    # -- helpers -----------------------------------------------------------

    def _require(self, *screens: Screen) -> None:
        if self.screen not in screens:
            allowed = ", ".join(s.value for s in screens)
            raise InvalidTransition(
                f"Action requires screen {allowed}; current screen is {self.screen.value}"
            )

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until no task is outstanding, including ones spawned meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # -- navigation --------------------------------------------------------

    def start(self) -> None:
        self._require(Screen.ONBOARDING)
        self.screen = Screen.GENDER

    def choose_gender(self, gender: Gender) -> None:
        self._require(Screen.GENDER)
        self.gender = Gender(gender)
        self.screen = Screen.AGE

    def choose_age(self, age: AgeBand) -> None:
        self._require(Screen.AGE)
        self.age = AgeBand(age)

    def start_quiz(self) -> asyncio.Task:
        self._require(Screen.AGE)
        if self.age is None:
            raise InvalidTransition("Select an age band before starting the quiz")
        self.loading_message = QUESTION_LOADING_MESSAGE
        self.screen = Screen.LOADING
        logger.info("Generating questions for %s/%s", self.gender.value, self.age.value)
        return self._spawn(self._load_questions())

    async def _load_questions(self) -> None:
        try:
            questions = await self.generator.generate_questions(self.gender, self.age)
        except Exception:
            logger.exception("Question generation failed")
            self.error = QUESTIONS_FAILED_MESSAGE
            self.screen = Screen.ERROR
            return
        self.questions = list(questions)
        self.answers = [None] * len(self.questions)
        self.current_index = 0
        self.screen = Screen.QUIZ

    def select_answer(self, option: int) -> Optional[asyncio.Task]:
        """Record an answer; returns the pending advance task, if a new one started."""
        self._require(Screen.QUIZ)
        question = self.questions[self.current_index]
        if not 0 <= option < len(question.options):
            raise InvalidSelection(
                f"Option {option} is out of range for question {self.current_index + 1}"
            )
        self.answers[self.current_index] = option
        if self._advance_pending:
            return None
        self._advance_pending = True
        return self._spawn(self._advance())

    async def _advance(self) -> None:
        try:
            await asyncio.sleep(self.feedback_delay)
        finally:
            self._advance_pending = False
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            return
        self.loading_message = self._rng.choice(ANALYSIS_LOADING_MESSAGES)
        self.screen = Screen.LOADING
        logger.info("Analyzing %d answers", len(self.answers))
        await self._analyze()

    async def _analyze(self) -> None:
        try:
            result = await self.generator.analyze_answers(
                self.gender, self.age, list(self.questions), list(self.answers)
            )
        except Exception:
            logger.exception("Answer analysis failed")
            self.error = ANALYSIS_FAILED_MESSAGE
            self.screen = Screen.ERROR
            return
        self.result = result
        self._enter_results()

    def _enter_results(self) -> None:
        self.screen = Screen.RESULTS
        if not self.prompt_answered:
            self._spawn(self._reveal_image_prompt())

    async def _reveal_image_prompt(self) -> None:
        await asyncio.sleep(self.image_prompt_delay)
        if self.screen is Screen.RESULTS and not self.prompt_answered:
            self.show_image_prompt = True

    def answer_image_prompt(self, accept: bool) -> Optional[asyncio.Task]:
        self._require(Screen.RESULTS)
        if not self.show_image_prompt:
            raise InvalidTransition("The image offer has not been shown yet")
        self.show_image_prompt = False
        self.prompt_answered = True
        if not accept:
            return None
        self.loading_message = self._rng.choice(IMAGE_LOADING_MESSAGES)
        self.screen = Screen.LOADING
        logger.info("Generating %s portrait", self.result.animal)
        return self._spawn(self._load_image())

    async def _load_image(self) -> None:
        try:
            image_url = await self.generator.generate_image(self.result, self.gender, self.age)
        except Exception:
            logger.exception("Image generation failed")
            self.error = IMAGE_FAILED_MESSAGE
            self._enter_results()
            return
        self.image_url = image_url
        self.screen = Screen.IMAGE_RESULT

    def cancel_pending(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._advance_pending = False

    def restart(self) -> None:
        """Drop any in-flight work and return to the onboarding screen."""
        self.cancel_pending()
        self._reset_fields()

    # -- rendering ---------------------------------------------------------

    def view(self) -> ScreenView:
        if self.screen is Screen.GENDER:
            return GenderView()
        if self.screen is Screen.AGE:
            return AgeView(gender=self.gender, age=self.age, can_start=self.age is not None)
        if self.screen is Screen.QUIZ:
            total = len(self.questions)
            return QuizView(
                index=self.current_index,
                total=total,
                question=self.questions[self.current_index],
                selected=self.answers[self.current_index],
                progress=(self.current_index + 1) / total,
            )
        if self.screen is Screen.LOADING:
            return LoadingView(message=self.loading_message)
        if self.screen is Screen.RESULTS:
            return ResultsView(
                result=self.result,
                show_image_prompt=self.show_image_prompt,
                show_restart=self.prompt_answered and not self.show_image_prompt,
                notice=self.error or None,
            )
        if self.screen is Screen.IMAGE_RESULT:
            return ImageResultView(result=self.result, image_url=self.image_url)
        if self.screen is Screen.ERROR:
            return ErrorView(message=self.error)
        return OnboardingView()

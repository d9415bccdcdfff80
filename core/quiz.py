"""Quiz drill: pick the translation of an English word or phrase."""

import logging
from dataclasses import dataclass

from .config import (
    QUIZ_MIN_ENTRIES, QUIZ_DISTRACTOR_COUNT,
    QUIZ_CORRECT_REVEAL_SECONDS, QUIZ_INCORRECT_DELAY_SECONDS
)
from .distractors import distractors
from .drill import Drill
from .models import Entry, Outcome
from .vocabulary import VocabularyView, unique_by_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Question:
    number: int
    entry: Entry
    options: tuple

    @property
    def prompt(self) -> str:
        return self.entry.english


@dataclass(frozen=True)
class AwaitingAnswer:
    question: Question


@dataclass(frozen=True)
class Revealed:
    question: Question
    choice: str
    correct: bool


class QuizDrill(Drill):
    """Multiple choice over words and phrases; only the first answer counts."""

    kind = 'quiz'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.score = 0
        self.asked = 0
        self._numbers = 0
        self.state = None
        self.setup()

    def setup(self) -> None:
        self._require(self.entries, QUIZ_MIN_ENTRIES)
        self.score = 0
        self.asked = 0
        self.next_question()

    def _source_pool(self) -> list[Entry]:
        """Phrases or words with equal odds; a pool too small to quiz is skipped."""
        view = VocabularyView(unique_by_identity(self.entries))
        phrases, words = view.phrases(), view.words()
        first, second = (phrases, words) if self.rng.random() > 0.5 else (words, phrases)
        for pool in (first, second):
            if len(pool) >= QUIZ_MIN_ENTRIES:
                return pool
        return view.entries

    def _distinct_texts(self, answer: str, pool: list[Entry]) -> list[Entry]:
        """One entry per displayed text, none showing the answer text."""
        seen = {answer}
        distinct = []
        for entry in pool:
            text = entry.text(self.language)
            if text not in seen:
                seen.add(text)
                distinct.append(entry)
        return distinct

    def next_question(self) -> Question:
        pool = self._source_pool()
        correct = self.rng.choice(pool)
        answer = correct.text(self.language)
        wrong = distractors(correct, self._distinct_texts(answer, pool), QUIZ_DISTRACTOR_COUNT, self.rng)
        options = [answer] + [e.text(self.language) for e in wrong]
        self.rng.shuffle(options)
        self._numbers += 1
        question = Question(number=self._numbers, entry=correct, options=tuple(options))
        self.state = AwaitingAnswer(question)
        return question

    @property
    def question(self) -> Question:
        return self.state.question

    def submit(self, choice) -> Outcome:
        return self.answer(choice)

    def answer(self, option: str) -> Outcome:
        if self.closed or not isinstance(self.state, AwaitingAnswer):
            return Outcome.ignored()
        question = self.state.question
        self.asked += 1
        correct = option == question.entry.text(self.language)
        self.state = Revealed(question, option, correct)

        if correct:
            self.score += 1
            self._later(QUIZ_CORRECT_REVEAL_SECONDS, self._advance_from, question.number)
            return Outcome(accepted=True, correct=True, score_delta=1)

        delta = self._record_mistake(question.entry.identity)
        self._later(QUIZ_INCORRECT_DELAY_SECONDS, self._advance_from, question.number)
        return Outcome(accepted=True, correct=False, ledger_delta=delta)

    def complete_reveal(self) -> bool:
        """Visual-completion signal after a correct answer.

        Incorrect answers always wait out their fixed delay.
        """
        if self.closed or not isinstance(self.state, Revealed) or not self.state.correct:
            return False
        self._advance_from(self.state.question.number)
        return True

    def _advance_from(self, number: int) -> None:
        if isinstance(self.state, Revealed) and self.state.question.number == number:
            self.next_question()

    @property
    def tally(self) -> str:
        return f"{self.score}/{self.asked}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        question = self.state.question
        data.update({
            'question_number': question.number,
            'prompt': question.prompt,
            'options': list(question.options),
            'score': self.score,
            'asked': self.asked,
            'tally': self.tally
        })
        if isinstance(self.state, Revealed):
            data['choice'] = self.state.choice
            data['correct'] = self.state.correct
            data['answer'] = question.entry.text(self.language)
        return data

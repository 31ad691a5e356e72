"""Discovery session state and persistence.

A DiscoverySession drives one discovery conversation: it diagnoses the
creator's accumulated messages, holds the current batch of follow-up
questions, records answers one at a time into the known inputs, and exposes
progress and the progression gate. DiscoverySessionStore persists sessions
as one YAML file each.
"""

import logging
import re
import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_SESSION_DIR
from .entropy import InputDiagnosis, diagnose
from .inputs import DiscoveryInputs
from .progress import calculate_progress, should_show_gate
from .questions import QUESTION_FIELDS, generate_questions, question_key

logger = logging.getLogger(__name__)

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class DiscoveryError(Exception):
    """Raised when a discovery session is used out of order."""

    pass


class DiscoveryStatus(Enum):
    """Lifecycle of a discovery session."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass
class DiscoverySession:
    """State of one discovery conversation.

    Attributes:
        session_id: Identifier, also the file name used by the store
        inputs: Fields gathered so far
        messages: Free-text messages submitted by the creator
        diagnosis: Latest diagnosis, None before the first submission
        questions: Current batch of follow-up questions
        question_index: Number of questions of the batch already answered
        answers: Every recorded answer as ``{question, answer, field}``
        status: Session lifecycle status
    """

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    inputs: DiscoveryInputs = field(default_factory=DiscoveryInputs)
    messages: list[str] = field(default_factory=list)
    diagnosis: InputDiagnosis | None = None
    questions: list[str] = field(default_factory=list)
    question_index: int = 0
    answers: list[dict[str, Any]] = field(default_factory=list)
    status: DiscoveryStatus = DiscoveryStatus.NOT_STARTED
    created_at: str = field(default_factory=_utc_now)
    updated_at: str = field(default_factory=_utc_now)

    def submit(self, text: str) -> InputDiagnosis:
        """Add a creator message, re-diagnose, and start a new question batch.

        All messages submitted so far are diagnosed together, so the level can
        only reflect the full picture the creator has given.

        Returns:
            The new diagnosis
        """
        self.messages.append(text)
        self.diagnosis = diagnose(" ".join(self.messages), self.inputs)
        self.questions = generate_questions(self.diagnosis, self.inputs)
        self.question_index = 0
        self.status = DiscoveryStatus.IN_PROGRESS if self.questions else DiscoveryStatus.COMPLETE
        self._touch()

        logger.info(
            f"Session {self.session_id}: diagnosed {self.diagnosis.level.value}, "
            f"{len(self.questions)} question(s) queued"
        )
        return self.diagnosis

    def next_question(self) -> str | None:
        """Return the first unanswered question, or None when none is pending."""
        if self.status is not DiscoveryStatus.IN_PROGRESS:
            return None
        if self.question_index >= len(self.questions):
            return None
        return self.questions[self.question_index]

    def answer(self, text: str) -> None:
        """Record the answer to the pending question.

        Answers to questions that map onto an input field are stored in that
        field, replacing any earlier value.

        Raises:
            DiscoveryError: If no question is pending
        """
        question = self.next_question()
        if question is None:
            raise DiscoveryError(f"Session {self.session_id} has no pending question to answer")

        key = question_key(question)
        input_field = QUESTION_FIELDS.get(key) if key else None
        if input_field is not None:
            self.inputs = self.inputs.with_value(input_field, text)

        self.answers.append({"question": question, "answer": text, "field": input_field})
        self.question_index += 1
        if self.question_index >= len(self.questions):
            self.status = DiscoveryStatus.COMPLETE
        self._touch()

        logger.debug(
            f"Session {self.session_id}: answered {self.question_index}/{len(self.questions)}"
        )

    def finish(self) -> None:
        """Stop asking questions ("generate now")."""
        self.status = DiscoveryStatus.COMPLETE
        self._touch()

    @property
    def answered_count(self) -> int:
        """Questions answered in the current batch."""
        return self.question_index

    @property
    def progress(self) -> int:
        """Percentage of the current batch answered."""
        return calculate_progress(self.question_index, len(self.questions))

    @property
    def show_gate(self) -> bool:
        """Whether to offer "continue answering vs. generate now"."""
        if self.status is not DiscoveryStatus.IN_PROGRESS:
            return False
        return should_show_gate(self.question_index, len(self.questions))

    @property
    def is_complete(self) -> bool:
        return self.status is DiscoveryStatus.COMPLETE

    def _touch(self) -> None:
        self.updated_at = _utc_now()

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain data for YAML persistence."""
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "inputs": self.inputs.to_dict(),
            "messages": list(self.messages),
            "diagnosis": self.diagnosis.to_dict() if self.diagnosis else None,
            "questions": list(self.questions),
            "question_index": self.question_index,
            "answers": [dict(entry) for entry in self.answers],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiscoverySession":
        """Rebuild a session produced by :meth:`to_dict`."""
        diagnosis_data = data.get("diagnosis")
        return cls(
            session_id=str(data["session_id"]),
            inputs=DiscoveryInputs.coerce(data.get("inputs") or {}),
            messages=list(data.get("messages") or []),
            diagnosis=InputDiagnosis.from_dict(diagnosis_data) if diagnosis_data else None,
            questions=list(data.get("questions") or []),
            question_index=int(data.get("question_index", 0)),
            answers=list(data.get("answers") or []),
            status=DiscoveryStatus(data.get("status", DiscoveryStatus.NOT_STARTED.value)),
            created_at=data.get("created_at") or _utc_now(),
            updated_at=data.get("updated_at") or _utc_now(),
        )


class DiscoverySessionStore:
    """Stores discovery sessions as ``<session_id>.yaml`` files.

    Args:
        session_dir: Directory holding the session files. Created on first save.
    """

    def __init__(self, session_dir: Path | str = DEFAULT_SESSION_DIR) -> None:
        self.session_dir = Path(session_dir)
        self._lock = threading.Lock()

    def _session_file(self, session_id: str) -> Path:
        if not _SESSION_ID_RE.match(session_id):
            raise DiscoveryError(f"Invalid session id: {session_id!r}")
        return self.session_dir / f"{session_id}.yaml"

    def exists(self, session_id: str) -> bool:
        """Check if a session file exists."""
        return self._session_file(session_id).exists()

    def save(self, session: DiscoverySession) -> Path:
        """Write a session to disk, replacing any earlier version.

        Returns:
            Path of the written file

        Raises:
            DiscoveryError: If the session holds values YAML cannot store
                safely. The file on disk is left untouched.
        """
        session_file = self._session_file(session.session_id)
        try:
            content = yaml.safe_dump(session.to_dict(), default_flow_style=False, sort_keys=False)
        except yaml.YAMLError as e:
            raise DiscoveryError(f"Cannot serialise session {session.session_id}: {e}") from e

        with self._lock:
            self.session_dir.mkdir(parents=True, exist_ok=True)
            with open(session_file, "w") as f:
                f.write(content)
        logger.debug(f"Saved discovery session {session.session_id} to {session_file}")
        return session_file

    def load(self, session_id: str) -> DiscoverySession | None:
        """Load a session.

        Returns:
            The session, or None if it does not exist or cannot be parsed
        """
        session_file = self._session_file(session_id)
        with self._lock:
            if not session_file.exists():
                return None
            try:
                with open(session_file) as f:
                    data = yaml.safe_load(f) or {}
                return DiscoverySession.from_dict(data)
            except (yaml.YAMLError, KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Corrupted session file {session_file.name}, ignoring: {e}")
                return None

    def delete(self, session_id: str) -> bool:
        """Delete a session file.

        Returns:
            True if a file was removed, False if there was none
        """
        session_file = self._session_file(session_id)
        with self._lock:
            if not session_file.exists():
                return False
            session_file.unlink()
        logger.info(f"Deleted discovery session {session_id}")
        return True

    def list_sessions(self) -> list[str]:
        """Return the ids of all stored sessions, sorted."""
        if not self.session_dir.exists():
            return []
        return sorted(path.stem for path in self.session_dir.glob("*.yaml"))

"""
JSONL-based local storage for workout sessions and nutrition logs.

Handles reading, writing, and managing the history files that feed the
scheduler and progression engine from the command line.
"""

import json
import os
from pathlib import Path

from ..core.models import FoodLog, Profile, WaterLog, WorkoutSession
from .serializers import (
    ValidationError,
    dict_to_nutrition_log,
    dict_to_profile,
    food_log_to_dict,
    json_line_to_session,
    profile_to_dict,
    session_to_json_line,
    water_log_to_dict,
)


class HistoryStore:
    """
    Manages workout history stored in JSONL format.

    Files live side by side in one directory:
    - sessions.jsonl: one session per line, sorted by date
    - profile.json: the user profile with flat split_* columns
    - nutrition.jsonl: food and water records (``kind`` = food | water)
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the sessions JSONL file
        """
        self.history_path = Path(history_path)
        self.profile_path = self.history_path.parent / "profile.json"
        self.nutrition_path = self.history_path.parent / "nutrition.jsonl"

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self) -> None:
        """
        Create empty history files if they don't exist.

        Creates parent directories if needed.
        """
        self.history_path.parent.mkdir(parents=True, exist_ok=True)
        for path in (self.history_path, self.nutrition_path):
            if not path.exists():
                path.touch()

    def _require_history(self) -> None:
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

    # -- profile ------------------------------------------------------------

    def load_profile(self) -> Profile | None:
        """
        Load the profile from profile.json.

        Returns:
            Profile if the file exists and is valid, None otherwise
        """
        if not self.profile_path.exists():
            return None
        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
            return dict_to_profile(data)
        except (json.JSONDecodeError, ValidationError):
            return None

    def save_profile(self, profile: Profile) -> None:
        """Write profile.json, creating the directory if needed."""
        self.profile_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.profile_path, "w") as f:
            json.dump(profile_to_dict(profile), f, indent=2)

    # -- sessions -----------------------------------------------------------

    def load_history(self, newest_first: bool = False) -> list[WorkoutSession]:
        """
        Load all sessions from the history file.

        Args:
            newest_first: Reverse the chronological order

        Returns:
            Sessions sorted by date (then start time)

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        self._require_history()

        sessions: list[WorkoutSession] = []
        with open(self.history_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    sessions.append(json_line_to_session(line))
                except ValidationError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e

        sessions.sort(key=lambda s: (s.day, s.start_time), reverse=newest_first)
        return sessions

    def append_session(self, session: WorkoutSession) -> None:
        """
        Add a session, keeping the file in chronological order.

        A session with the same id replaces the stored one (edit path).
        """
        self._require_history()
        sessions = [s for s in self.load_history() if s.id != session.id]
        sessions.append(session)
        sessions.sort(key=lambda s: (s.day, s.start_time))
        self._write_sessions(sessions)

    def _write_sessions(self, sessions: list[WorkoutSession]) -> None:
        tmp = self.history_path.with_suffix(".tmp")
        with open(tmp, "w") as f:
            for session in sessions:
                f.write(session_to_json_line(session) + "\n")
        os.replace(tmp, self.history_path)

    def delete_session_at(self, index: int) -> WorkoutSession:
        """
        Delete the session at the given 0-based index in sorted history.

        Returns:
            The removed session

        Raises:
            IndexError: If index is out of range
        """
        sessions = self.load_history()
        if index < 0 or index >= len(sessions):
            raise IndexError(f"Session index {index} out of range (0-{len(sessions) - 1})")
        removed = sessions.pop(index)
        self._write_sessions(sessions)
        return removed

    # -- nutrition ----------------------------------------------------------

    def load_nutrition(self) -> tuple[list[FoodLog], list[WaterLog]]:
        """
        Load food and water logs.

        Returns:
            (food_logs, water_logs) in file order; empty if no file yet
        """
        foods: list[FoodLog] = []
        water: list[WaterLog] = []
        if not self.nutrition_path.exists():
            return foods, water

        with open(self.nutrition_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = dict_to_nutrition_log(json.loads(line))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.nutrition_path}: {e}"
                    ) from e
                if isinstance(record, FoodLog):
                    foods.append(record)
                else:
                    water.append(record)
        return foods, water

    def append_food(self, log: FoodLog) -> None:
        self._append_nutrition(food_log_to_dict(log))

    def append_water(self, log: WaterLog) -> None:
        self._append_nutrition(water_log_to_dict(log))

    def _append_nutrition(self, record: dict) -> None:
        self._require_history()
        with open(self.nutrition_path, "a") as f:
            f.write(json.dumps(record, separators=(",", ":")) + "\n")


def get_default_history_path() -> Path:
    """Default sessions file: ~/.ironmind/sessions.jsonl."""
    return Path.home() / ".ironmind" / "sessions.jsonl"

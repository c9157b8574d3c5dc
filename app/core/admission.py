"""Admission gate for the upload surface.

The gate checks an identifier/secret pair against a fixed allow-list compiled
into the application and flips a persisted ``admitted`` flag. Each client
profile has its own flag; admitting one profile admits no other.

This is NOT a security boundary. Secrets are compared in plaintext, nothing
is hashed, there is no lockout or rate limiting, and the record and blob
stores stay reachable by anyone holding the public Supabase key. The gate only
decides whether the upload surface is offered. Replacing it with a real
credential verifier means passing a different ``allow_list`` (or swapping
``AdmissionGate``) without touching callers.
"""
import re
from pathlib import Path
from typing import Iterable, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.logging_config import get_logger
from app.models.admission import AdmissionState

logger = get_logger(__name__)

PROFILE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Build-time allow-list of (identifier, secret) pairs
ADMIN_ALLOW_LIST: Tuple[Tuple[str, str], ...] = (
    ("admin_mu_eng_2024", "MU_Papers_Secure@2024"),
)


class AdmissionStateStore:
    """Keeps AdmissionState in a local JSON file scoped to one client profile."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def for_profile(cls, directory: Union[str, Path], profile_id: str) -> "AdmissionStateStore":
        """Store for one client profile. Profile ids never contain path separators."""
        if not PROFILE_ID_PATTERN.match(profile_id or ""):
            raise ValueError(f"Invalid client profile id: {profile_id!r}")
        return cls(Path(directory) / f"{profile_id}.json")

    def load(self) -> AdmissionState:
        if not self.path.exists():
            return AdmissionState()
        try:
            return AdmissionState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, PydanticValidationError) as e:
            logger.warning(f"Ignoring unreadable admission state at {self.path}: {e}")
            return AdmissionState()

    def save(self, state: AdmissionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(state.model_dump_json(), encoding="utf-8")
        tmp_path.replace(self.path)


def load_admission_state(store: AdmissionStateStore) -> AdmissionState:
    """Explicit init of a client profile's admission flag from its file."""
    state = store.load()
    if state.admitted:
        logger.debug(f"Restored admission for {state.identifier}")
    return state


class AdmissionGate:
    def __init__(
        self,
        store: AdmissionStateStore,
        allow_list: Iterable[Tuple[str, str]] = ADMIN_ALLOW_LIST,
    ):
        self.store = store
        self._allow_list = tuple(allow_list)

    def _commit(self, state: AdmissionState, **changes) -> None:
        # state only changes once the new values are on disk
        updated = state.model_copy(update=changes)
        self.store.save(updated)
        state.admitted = updated.admitted
        state.identifier = updated.identifier

    def admit(self, state: AdmissionState, identifier: str, secret: str) -> bool:
        """Admit ``identifier`` when the pair is on the allow-list.

        A mismatch is a normal ``False`` result and leaves ``state`` untouched.
        A failed save raises and also leaves ``state`` untouched.
        """
        if not any(identifier == allowed_id and secret == allowed_secret
                   for allowed_id, allowed_secret in self._allow_list):
            logger.warning(f"Admission rejected for identifier {identifier!r}")
            return False

        self._commit(state, admitted=True, identifier=identifier)
        logger.info(f"Admitted {identifier}")
        return True

    def revoke(self, state: AdmissionState) -> None:
        if state.admitted:
            logger.info(f"Revoking admission for {state.identifier}")
        self._commit(state, admitted=False, identifier=None)

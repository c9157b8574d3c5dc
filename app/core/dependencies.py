"""FastAPI dependencies for store access and the admission gate."""
from uuid import uuid4

from fastapi import Depends, Request, Response

from app.core import config
from app.core.admission import (
    PROFILE_ID_PATTERN,
    AdmissionGate,
    AdmissionStateStore,
    load_admission_state,
)
from app.core.blob_store import BlobStore
from app.core.exceptions import AuthorizationError
from app.core.record_store import RecordStore
from app.core.supabase import supabase
from app.models.admission import AdmissionState


def get_record_store() -> RecordStore:
    return RecordStore(supabase)


def get_blob_store() -> BlobStore:
    return BlobStore(supabase)


def get_storage_bucket() -> str:
    return config.settings.STORAGE_BUCKET


def get_admission_dir() -> str:
    return config.settings.ADMISSION_STATE_DIR


def get_client_profile(request: Request, response: Response) -> str:
    """Client profile id from its cookie; a new profile is issued when absent or malformed."""
    cookie_name = config.settings.CLIENT_PROFILE_COOKIE
    profile_id = request.cookies.get(cookie_name)
    if profile_id and PROFILE_ID_PATTERN.match(profile_id):
        return profile_id

    profile_id = uuid4().hex
    response.set_cookie(
        cookie_name,
        profile_id,
        max_age=config.settings.CLIENT_PROFILE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return profile_id


def get_admission_store(
    profile_id: str = Depends(get_client_profile),
    directory: str = Depends(get_admission_dir),
) -> AdmissionStateStore:
    return AdmissionStateStore.for_profile(directory, profile_id)


def get_admission_gate(store: AdmissionStateStore = Depends(get_admission_store)) -> AdmissionGate:
    return AdmissionGate(store)


def get_admission_state(store: AdmissionStateStore = Depends(get_admission_store)) -> AdmissionState:
    """The calling profile's admission state, read from disk on every request."""
    return load_admission_state(store)


def require_admission(state: AdmissionState = Depends(get_admission_state)) -> AdmissionState:
    """Gate for the upload surface. Does not protect the stores themselves."""
    if not state.admitted:
        raise AuthorizationError(
            "You need to be logged in as an administrator to upload papers.",
            error_code="NOT_ADMITTED"
        )
    return state

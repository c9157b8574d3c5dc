from fastapi import APIRouter, Depends

from app.core.admission import AdmissionGate
from app.core.dependencies import get_admission_gate, get_admission_state
from app.models.admission import AdminLogin, AdmissionState, AdmissionStatus

router = APIRouter()


@router.post("/login", response_model=AdmissionStatus)
async def login(
    credentials: AdminLogin,
    gate: AdmissionGate = Depends(get_admission_gate),
    state: AdmissionState = Depends(get_admission_state)
):
    """Admit an operator to the upload surface.

    A wrong pair is not an error: the response simply reports ``admitted: false``.
    """
    if gate.admit(state, credentials.identifier, credentials.secret):
        return AdmissionStatus(admitted=True, identifier=state.identifier)
    return AdmissionStatus(
        admitted=state.admitted,
        identifier=state.identifier,
        message="Invalid credentials. Please check your Admin ID and password."
    )


@router.post("/logout", response_model=AdmissionStatus)
async def logout(
    gate: AdmissionGate = Depends(get_admission_gate),
    state: AdmissionState = Depends(get_admission_state)
):
    gate.revoke(state)
    return AdmissionStatus(admitted=False)


@router.get("/status", response_model=AdmissionStatus)
async def admission_status(state: AdmissionState = Depends(get_admission_state)):
    return AdmissionStatus(admitted=state.admitted, identifier=state.identifier)

"""
Manage Admission Script
Check, grant or clear the admission flag that unlocks paper uploads for one
client profile. Browsers get their profile id in the ``mu_client_profile``
cookie; the shell uses the ``local`` profile unless another id is given.

The server reads the flag from disk on every request, so changes made here
apply to a running server immediately.

Usage:
    python manage_admission.py status [profile_id]
    python manage_admission.py login [profile_id]
    python manage_admission.py logout [profile_id]
"""

import os
import sys
from getpass import getpass
from dotenv import load_dotenv

from app.core.admission import AdmissionGate, AdmissionStateStore, load_admission_state

# Load environment variables
load_dotenv()

DEFAULT_STATE_DIR = ".mu_papers/admission"
DEFAULT_PROFILE = "local"


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    command = argv[0] if argv else "status"
    profile_id = argv[1] if len(argv) > 1 else DEFAULT_PROFILE

    try:
        store = AdmissionStateStore.for_profile(
            os.getenv("ADMISSION_STATE_DIR", DEFAULT_STATE_DIR), profile_id
        )
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 2
    gate = AdmissionGate(store)
    state = load_admission_state(store)

    if command == "status":
        if state.admitted:
            print(f"✅ Profile {profile_id} admitted as {state.identifier}")
        else:
            print(f"🔒 Profile {profile_id} not admitted")
        return 0

    if command == "login":
        print("\n🔐 Admin Login")
        print("=" * 50)
        identifier = input("Admin ID: ").strip()
        secret = getpass("Password: ")
        if not identifier or not secret:
            print("❌ Error: Admin ID and password are required")
            return 1
        if gate.admit(state, identifier, secret):
            print(f"✅ Profile {profile_id} admitted as {identifier}")
            return 0
        print("❌ Invalid credentials. Please check your Admin ID and password.")
        return 1

    if command == "logout":
        gate.revoke(state)
        print(f"👋 Profile {profile_id} logged out")
        return 0

    print(f"❌ Unknown command: {command}")
    print(__doc__)
    return 2


if __name__ == "__main__":
    sys.exit(main())

"""Directory of organizations that accept noise-pollution complaints."""

from __future__ import annotations

from typing import Dict, List, Tuple

from models.records import Organization

DEFAULT_STATE = "Delhi"

_STATE_ORGANIZATIONS: Dict[str, Tuple[Organization, ...]] = {
    "Delhi": (
        Organization(
            id=1,
            name="Delhi Pollution Control Committee",
            description=(
                "State-level authority for monitoring and controlling environmental "
                "pollution in Delhi."
            ),
            address="4th Floor, ISBT Building, Kashmere Gate, Delhi-110006",
            phone="011-43102256",
            email="dpcc@nic.in",
            website="https://dpcc.delhigovt.nic.in",
            type="Government",
        ),
        Organization(
            id=2,
            name="Central Pollution Control Board",
            description=(
                "National level organization for monitoring and controlling "
                "environmental pollution."
            ),
            address="Parivesh Bhawan, East Arjun Nagar, Delhi-110032",
            phone="011-43102030",
            email="cpcb@nic.in",
            website="https://cpcb.nic.in",
            type="Government",
        ),
    ),
    "Maharashtra": (
        Organization(
            id=3,
            name="Maharashtra Pollution Control Board",
            description="State-level environmental protection agency for Maharashtra.",
            address="Kalpataru Point, Sion, Mumbai-400022",
            phone="022-24020781",
            email="mpcb@mpcb.gov.in",
            website="https://mpcb.gov.in",
            type="Government",
        ),
    ),
    "Karnataka": (
        Organization(
            id=4,
            name="Karnataka State Pollution Control Board",
            description="Environmental protection authority for Karnataka state.",
            address="Church Street, Bengaluru-560001",
            phone="080-25589112",
            email="kspcb@kspcb.gov.in",
            website="https://kspcb.gov.in",
            type="Government",
        ),
    ),
    "Tamil Nadu": (
        Organization(
            id=5,
            name="Tamil Nadu Pollution Control Board",
            description="State pollution monitoring and control authority for Tamil Nadu.",
            address="76, Mount Salai, Guindy, Chennai-600032",
            phone="044-22353134",
            email="tnpcb@tn.nic.in",
            website="https://tnpcb.gov.in",
            type="Government",
        ),
    ),
    "West Bengal": (
        Organization(
            id=6,
            name="West Bengal Pollution Control Board",
            description="State environmental regulatory authority for West Bengal.",
            address="Paribesh Bhawan, 10A Block, LA, Sector III, Kolkata-700098",
            phone="033-23355073",
            email="wbpcb@wbpcb.gov.in",
            website="https://wbpcb.gov.in",
            type="Government",
        ),
    ),
    "Telangana": (
        Organization(
            id=7,
            name="Telangana State Pollution Control Board",
            description="Environmental protection and monitoring body for Telangana.",
            address="Paryavarana Bhavan, A-3, IE, Sanathnagar, Hyderabad-500018",
            phone="040-23887500",
            email="tspcb@telangana.gov.in",
            website="https://tspcb.cgg.gov.in",
            type="Government",
        ),
    ),
}

NATIONAL_GREEN_TRIBUNAL = Organization(
    id=8,
    name="National Green Tribunal",
    description=(
        "Dedicated environmental court handling cases related to environmental "
        "protection."
    ),
    address="Copernicus Marg, New Delhi-110001",
    phone="011-23043501",
    email="filing.ngt@nic.in",
    website="https://greentribunal.gov.in",
    type="Legal",
)

REPORTING_CHECKLIST: Tuple[str, ...] = (
    "Exact location of the noise source",
    "Type of noise (construction, traffic, commercial activity, etc.)",
    "Time and duration of the noise",
    "Frequency of occurrence (daily, weekly, etc.)",
    "Any evidence (recordings, measurements from our app)",
    "Impact on your daily life",
)


def resolve_state(location_name: str) -> str:
    """Pick the first comma-separated part naming a known state."""
    for part in location_name.split(", "):
        if part in _STATE_ORGANIZATIONS:
            return part
    return DEFAULT_STATE


def organizations_for_state(state: str) -> List[Organization]:
    """State boards first, then the national tribunal."""
    return [*_STATE_ORGANIZATIONS.get(state, ()), NATIONAL_GREEN_TRIBUNAL]

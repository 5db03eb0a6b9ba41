"""Brand onboarding step catalog and option lists."""

from dataclasses import dataclass
from enum import Enum


class StepType(str, Enum):
    """Which input widget renders a step. Rendering hint only."""
    TEXT = "text"
    URL = "url"
    SELECT = "select"
    RADIO = "radio"
    MULTISELECT = "multiselect"
    UPLOAD = "upload"
    TEXTAREA = "textarea"
    EMAIL = "email"
    TEL = "tel"
    REVIEW = "review"
    COMPOSITE = "composite"


TEXT_INPUT_TYPES = frozenset({
    StepType.TEXT, StepType.URL, StepType.TEXTAREA, StepType.EMAIL, StepType.TEL,
})
CHOICE_TYPES = frozenset({StepType.SELECT, StepType.RADIO})


@dataclass(frozen=True)
class Step:
    """One page of the wizard."""
    id: str
    title: str
    type: StepType
    optional: bool = False
    options: tuple[tuple[str, str], ...] = ()

    def option_label(self, value: str) -> str:
        for option_value, label in self.options:
            if option_value == value:
                return label
        return value


def _same(*values: str) -> tuple[tuple[str, str], ...]:
    """Options whose stored value is also the label."""
    return tuple((v, v) for v in values)


# ── Option lists ───────────────────────────────────────────

INDUSTRY_OPTIONS = _same(
    "Beauty & Cosmetics", "Fashion & Apparel", "Wellness & Health", "Technology",
    "Food & Beverage", "Travel & Tourism", "Home & Lifestyle", "Automotive",
    "Entertainment", "Education", "Finance", "Sports & Fitness", "Parenting",
    "Business", "Art & Design", "Gaming", "Music", "Photography",
)

COMPANY_SIZE_OPTIONS = (
    ("1-10", "1–10"),
    ("11-50", "11–50"),
    ("51-200", "51–200"),
    ("200+", "200+"),
)

BUDGET_OPTIONS = (
    ("under-10k", "Under $10K"),
    ("10k-25k", "$10K – $25K"),
    ("25k-50k", "$25K – $50K"),
    ("50k-100k", "$50K – $100K"),
    ("100k-250k", "$100K – $250K"),
    ("250k-500k", "$250K – $500K"),
    ("500k+", "$500K+"),
)

NICHE_OPTIONS = _same(
    "Beauty", "Skincare", "Lifestyle", "Sustainability", "Fitness", "Food",
    "Music", "Parenting", "Education", "Health", "Technology", "Art",
    "Business", "Travel", "Gaming", "Photography", "Finance", "Home Decor",
)

REGION_OPTIONS = _same(
    "United Kingdom", "United States", "Canada", "Europe", "Latin America",
    "Africa", "Asia Pacific", "Middle East", "Australia", "Global",
)

PRIMARY_REGION_OPTIONS = _same(
    "United Kingdom", "United States", "Canada", "Germany", "France",
    "Italy", "Spain", "Netherlands", "Australia", "New Zealand",
    "Brazil", "Mexico", "Japan", "South Korea", "India", "Singapore",
    "UAE", "South Africa", "Other",
)

CAMPAIGN_OBJECTIVE_OPTIONS = _same(
    "Brand Awareness", "Product Launch", "Sales & Conversions",
    "Engagement & Community Building", "Event Promotion",
    "Seasonal Campaign", "User-Generated Content", "Reviews & Testimonials",
    "Educational Content", "Lifestyle Integration", "Other",
)

PRODUCT_SERVICE_TYPE_OPTIONS = _same(
    "Physical Product", "Digital Product/Software", "Service-Based Business",
    "E-commerce", "Subscription Service", "Mobile App", "Event/Experience",
    "Consulting", "Education/Course", "Non-Profit", "Other",
)

CONTACT_METHOD_OPTIONS = (
    ("email", "Email"),
    ("phone", "Phone Call"),
    ("whatsapp", "WhatsApp"),
    ("any", "Any method is fine"),
)

PROACTIVE_SUGGESTIONS_OPTIONS = (
    ("yes", "Yes, suggest creators proactively"),
    ("no", "No, I'll browse and select myself"),
)

TEAM_INVITATION_OPTIONS = (
    ("yes", "Yes, I'd like to invite team members"),
    ("no", "No, just me for now"),
)

MAX_LOGO_FILE_SIZE_MB = 5
ALLOWED_LOGO_MIME_TYPES = frozenset({
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp",
})

TEAM_INVITATIONS_STEP_ID = "team_invitations"
TEAM_MEMBER_FIELDS = ("team_member_1_email", "team_member_2_email")


# ── Step sequence ──────────────────────────────────────────

BRAND_ONBOARDING_STEPS: tuple[Step, ...] = (
    Step("company_name", "What's your brand called?", StepType.TEXT),
    Step("website", "Do you have a website?", StepType.URL),
    Step("industry", "Which industry are you in?", StepType.SELECT, options=INDUSTRY_OPTIONS),
    Step("company_size", "How big is your team?", StepType.RADIO, options=COMPANY_SIZE_OPTIONS),
    Step("description", "What does your brand do?", StepType.TEXTAREA),
    Step("logo_url", "Upload your logo", StepType.UPLOAD, optional=True),
    Step("annual_budget", "What's your annual marketing budget?", StepType.RADIO, options=BUDGET_OPTIONS),
    Step(
        "preferred_niches", "What content niches do you want to focus on?",
        StepType.MULTISELECT, options=NICHE_OPTIONS,
    ),
    Step(
        "target_regions", "Where are your target customers located?",
        StepType.MULTISELECT, options=REGION_OPTIONS,
    ),
    Step(
        "primary_region", "What's your primary region of operation?",
        StepType.SELECT, optional=True, options=PRIMARY_REGION_OPTIONS,
    ),
    Step(
        "campaign_objective", "What's your main campaign objective?",
        StepType.SELECT, optional=True, options=CAMPAIGN_OBJECTIVE_OPTIONS,
    ),
    Step(
        "product_service_type", "What type of product/service do you offer?",
        StepType.SELECT, optional=True, options=PRODUCT_SERVICE_TYPE_OPTIONS,
    ),
    Step(
        "preferred_contact_method", "How would you prefer we contact you?",
        StepType.RADIO, optional=True, options=CONTACT_METHOD_OPTIONS,
    ),
    Step(
        "proactive_suggestions", "Would you like Stride to suggest creators proactively?",
        StepType.RADIO, optional=True, options=PROACTIVE_SUGGESTIONS_OPTIONS,
    ),
    Step(
        "invite_team_members", "Would you like to invite team members to collaborate?",
        StepType.RADIO, optional=True, options=TEAM_INVITATION_OPTIONS,
    ),
    Step(TEAM_INVITATIONS_STEP_ID, "Invite your team members", StepType.COMPOSITE, optional=True),
    Step("brand_contact_name", "Who's your main point of contact at your brand?", StepType.TEXT),
    Step("brand_contact_role", "What's their role in your company?", StepType.TEXT),
    Step("brand_contact_email", "Brand contact email address?", StepType.EMAIL),
    Step("brand_contact_phone", "Brand contact phone number?", StepType.TEL),
    Step(
        "stride_contact_name", "Who should be your main contact at Stride Social?",
        StepType.TEXT, optional=True,
    ),
    Step("review", "Final step: review your details", StepType.REVIEW),
)


def build_step_index(steps: tuple[Step, ...] | list[Step]) -> dict[str, int]:
    """Map step id → position. Raises ValueError on duplicate ids."""
    index: dict[str, int] = {}
    for position, step in enumerate(steps):
        if step.id in index:
            raise ValueError(f"Duplicate step id: {step.id}")
        index[step.id] = position
    return index


STEP_INDEX = build_step_index(BRAND_ONBOARDING_STEPS)

from .payload import validate_payload
from .forms import (
    SignupForm,
    SigninForm,
    ProfileForm,
    PasswordChangeForm,
    NotificationSettingsForm,
    TestimonialForm,
    ModerationForm,
    ProjectForm,
    ProjectUpdateForm,
    FormSettingsForm,
    WidgetCustomizationForm,
    LAYOUTS,
    STATUSES,
)

# testimonialhub/validation/forms.py
from __future__ import annotations

import re

from wtforms import (
    Form,
    StringField,
    PasswordField,
    TextAreaField,
    IntegerField,
    BooleanField,
    FormField,
    FieldList,
)
from wtforms.validators import (
    AnyOf,
    Email,
    InputRequired,
    Length,
    NumberRange,
    Optional as Opt,
    Regexp,
    URL,
)

from .validators import LettersAndSpaces, MinWords, Provided, StrictBoolean, strip_filter


LAYOUTS = ("carousel", "grid", "cards", "list")
STATUSES = ("pending", "approved", "rejected")
HEX_COLOR = r"^#[0-9A-F]{6}\Z"

EMAIL_VALIDATORS = [Email(message="Invalid email address")]


def _bool_field(json_name: str, required: bool = False) -> BooleanField:
    first = Provided() if required else Opt()
    return BooleanField(name=json_name, validators=[first, StrictBoolean()])


def _color_field(json_name: str) -> StringField:
    return StringField(
        name=json_name,
        filters=[strip_filter],
        validators=[Regexp(HEX_COLOR, flags=re.IGNORECASE, message="Invalid color format")],
    )


# -------------
# Accounts
# -------------

class SignupForm(Form):
    name = StringField(
        "Name",
        filters=[strip_filter],
        validators=[
            Length(min=2, message="Name must be at least 2 characters"),
            Length(max=60, message="Name cannot be more than 60 characters"),
            LettersAndSpaces(message="Name cannot contain numbers or special characters"),
        ],
    )
    email = StringField("Email", filters=[strip_filter], validators=EMAIL_VALIDATORS)
    password = PasswordField(
        "Password",
        validators=[Length(min=6, message="Password must be at least 6 characters")],
    )
    company = StringField(
        "Company",
        filters=[strip_filter],
        validators=[Opt(), Length(max=100, message="Company name cannot be more than 100 characters")],
    )


class SigninForm(Form):
    email = StringField("Email", filters=[strip_filter], validators=EMAIL_VALIDATORS)
    password = PasswordField("Password", validators=[InputRequired(message="Please provide email and password")])


class ProfileForm(Form):
    name = StringField(
        "Name",
        filters=[strip_filter],
        validators=[
            InputRequired(message="Name and email are required"),
            Length(min=1, message="Name and email are required"),
            Length(max=60, message="Name cannot be more than 60 characters"),
        ],
    )
    email = StringField(
        "Email",
        filters=[strip_filter],
        validators=[InputRequired(message="Name and email are required"), *EMAIL_VALIDATORS],
    )


class PasswordChangeForm(Form):
    current_password = PasswordField(
        name="currentPassword",
        validators=[InputRequired(message="Current and new password are required")],
    )
    new_password = PasswordField(
        name="newPassword",
        validators=[
            InputRequired(message="Current and new password are required"),
            Length(min=6, message="New password must be at least 6 characters"),
        ],
    )


class NotificationSettingsForm(Form):
    # a missing key means "off"
    email_on_new_testimonial = _bool_field("emailOnNewTestimonial")
    email_on_approval = _bool_field("emailOnApproval")
    email_weekly_report = _bool_field("emailWeeklyReport")
    email_monthly_report = _bool_field("emailMonthlyReport")


# -------------
# Testimonials
# -------------

class TestimonialForm(Form):
    name = StringField(
        "Name",
        filters=[strip_filter],
        validators=[
            Length(min=2, message="Name must be at least 2 characters"),
            Length(max=100, message="Name cannot be more than 100 characters"),
        ],
    )
    email = StringField("Email", filters=[strip_filter], validators=EMAIL_VALIDATORS)
    company = StringField(
        "Company",
        filters=[strip_filter],
        validators=[Opt(), Length(max=100, message="Company name cannot be more than 100 characters")],
    )
    position = StringField(
        "Position",
        filters=[strip_filter],
        validators=[Opt(), Length(max=100, message="Position cannot be more than 100 characters")],
    )
    rating = IntegerField(
        "Rating",
        validators=[NumberRange(min=1, max=5, message="Rating must be between 1 and 5")],
    )
    testimonial = TextAreaField(
        "Testimonial",
        filters=[strip_filter],
        validators=[
            Length(min=10, message="Testimonial must be at least 10 characters"),
            Length(max=1000, message="Testimonial cannot be more than 1000 characters"),
        ],
    )
    photo = StringField("Photo", filters=[strip_filter], validators=[Opt(), URL(message="Invalid URL")])
    video = StringField("Video", filters=[strip_filter], validators=[Opt(), URL(message="Invalid URL")])


class ModerationForm(Form):
    testimonial_id = IntegerField(
        name="testimonialId",
        validators=[InputRequired(message="Testimonial id is required")],
    )
    status = StringField(
        "Status",
        filters=[strip_filter],
        validators=[Opt(), AnyOf(STATUSES, message="Status must be pending, approved or rejected")],
    )
    featured = _bool_field("featured")

    def validate(self, extra_validators=None):
        ok = super().validate(extra_validators)
        if not self.status.raw_data and not self.featured.raw_data:
            self.status.errors.append("Provide a status or a featured flag")
            return False
        return ok


# -------------
# Projects
# -------------

def _project_name_validators(min_words: int | None):
    validators = [Length(min=1, message="Project name is required")]
    if min_words:
        validators.append(MinWords(min_words, message="Project name must contain at least 5 words"))
    validators.append(Length(max=100, message="Project name cannot be more than 100 characters"))
    return validators


class ProjectForm(Form):
    name = StringField("Project name", filters=[strip_filter], validators=_project_name_validators(5))
    description = TextAreaField(
        "Description",
        filters=[strip_filter],
        validators=[Opt(), Length(max=500, message="Description cannot be more than 500 characters")],
    )
    website = StringField(
        "Website",
        filters=[strip_filter],
        validators=[
            Opt(),
            URL(message="Invalid URL"),
            Length(max=200, message="Website URL cannot be more than 200 characters"),
        ],
    )


class ProjectUpdateForm(ProjectForm):
    # the word-count rule only guards creation
    name = StringField("Project name", filters=[strip_filter], validators=_project_name_validators(None))
    active = _bool_field("active")


class CustomQuestionForm(Form):
    question = StringField(
        "Question",
        filters=[strip_filter],
        validators=[
            Length(min=1, message="Question is required"),
            Length(max=200, message="Question cannot be more than 200 characters"),
        ],
    )
    required = _bool_field("required")


class FormSettingsForm(Form):
    collect_email = _bool_field("collectEmail")
    collect_company = _bool_field("collectCompany")
    collect_position = _bool_field("collectPosition")
    allow_video = _bool_field("allowVideo")
    allow_photo = _bool_field("allowPhoto")
    require_approval = _bool_field("requireApproval")
    custom_questions = FieldList(FormField(CustomQuestionForm), name="customQuestions")


# -------------
# Widget
# -------------

class ThemeForm(Form):
    primary_color = _color_field("primaryColor")
    background_color = _color_field("backgroundColor")
    text_color = _color_field("textColor")
    font_family = StringField(
        name="fontFamily",
        filters=[strip_filter],
        validators=[Provided(), Length(max=100, message="Font family cannot be more than 100 characters")],
    )


class WidgetCustomizationForm(Form):
    layout = StringField(
        "Layout",
        filters=[strip_filter],
        validators=[AnyOf(LAYOUTS, message="Layout must be one of carousel, grid, cards, list")],
    )
    theme = FormField(ThemeForm)
    show_ratings = _bool_field("showRatings", required=True)
    show_photos = _bool_field("showPhotos", required=True)
    show_company = _bool_field("showCompany", required=True)
    max_testimonials = IntegerField(
        name="maxTestimonials",
        validators=[NumberRange(min=1, max=50, message="Max testimonials must be between 1 and 50")],
    )

from flask_wtf import FlaskForm
from wtforms import PasswordField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Email, Length

from .posts import TITLE_MAX_LENGTH


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired()])
    password = PasswordField("Password", validators=[DataRequired()])
    submit = SubmitField("Log in")


class RegisterForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField("Password", validators=[DataRequired(), Length(max=128)])
    submit = SubmitField("Register")


class PostForm(FlaskForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=TITLE_MAX_LENGTH)])
    content = TextAreaField("Content", validators=[DataRequired()])
    submit = SubmitField("Save")


class ConfirmForm(FlaskForm):
    """Empty form for POST-only actions (logout, delete); carries the CSRF token."""
    submit = SubmitField("Confirm")

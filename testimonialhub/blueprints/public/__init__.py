from flask import Blueprint

# anonymous visitors: the share form and the embeddable widget
public_bp = Blueprint("public", __name__, url_prefix="/api")

from . import routes  # noqa: E402,F401

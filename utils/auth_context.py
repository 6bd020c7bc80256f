from flask import g
from security.session import get_session_from_request


def load_current_admin():
    g.admin_session = get_session_from_request()

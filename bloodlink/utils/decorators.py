from functools import wraps
from flask_login import current_user
from bloodlink.errors import Forbidden
from bloodlink.models.enums import Role


def roles_required(*roles):
    """
    Let the request through only if the token's role is one of ``roles``.
    Goes below @login_required so anonymous callers get a 401 first.
    """
    allowed = {role.authority for role in roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated or current_user.authority not in allowed:
                raise Forbidden('Access denied.')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = roles_required(Role.ADMIN)

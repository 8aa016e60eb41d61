from .auth import (
    User,
    CallerIdentity,
    get_current_user,
    get_caller_id,
)

from __future__ import annotations

import logging

CLIENT_METHODS = {
    "get",
    "post",
    "put",
    "delete",
}

LOGGER = logging.getLogger("hrclient.api")
APP_VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://localhost:7037"
DEFAULT_LOCALE = "en"
LOCALE_HEADER = "Culture"

LOGIN_PATH = "/v1/api/Auth/Login"
REFRESH_PATH = "/v1/api/Auth/RefreshToken"
LOGIN_ROUTE = "/login"

ROLE_CLAIMS = (
    "http://schemas.microsoft.com/ws/2008/06/identity/claims/role",
    "role",
    "roles",
    "Role",
    "Roles",
)
PERMISSION_CLAIMS = ("Permissions", "permissions", "Permission", "permission")
USER_ID_CLAIMS = (
    "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier",
    "sub",
    "id",
    "userId",
)
EMAIL_CLAIMS = (
    "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/emailaddress",
    "email",
    "Email",
)
USER_NAME_CLAIMS = (
    "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/name",
    "name",
    "username",
    "userName",
    "UserName",
    "unique_name",
)

from __future__ import annotations

from hrauth.credential_store import Credential
from hrclient.constants import LOGIN_PATH, REFRESH_PATH
from hrclient.errors import AuthenticationError, UNEXPECTED_ERROR_TITLE, UnexpectedError
from hrclient.pipeline import RequestPipeline, RequestSpec


def credential_from_payload(payload: object) -> Credential:
    if not isinstance(payload, dict):
        raise UnexpectedError(0, UNEXPECTED_ERROR_TITLE, ["Invalid token response"])

    access_token = payload.get("token")
    refresh_token = payload.get("refreshToken")
    if not isinstance(access_token, str) or not access_token:
        raise UnexpectedError(0, UNEXPECTED_ERROR_TITLE, ["Token response missing token"])
    if not isinstance(refresh_token, str) or not refresh_token:
        raise UnexpectedError(0, UNEXPECTED_ERROR_TITLE, ["Token response missing refreshToken"])

    return Credential(access_token=access_token, refresh_token=refresh_token)


def login_request(user_name: str, password: str, *, path: str = LOGIN_PATH) -> RequestSpec:
    return RequestSpec(
        "post",
        path,
        body={"userName": user_name, "password": password},
        bypass_auth=True,
    )


def refresh_request(credential: Credential, *, path: str = REFRESH_PATH) -> RequestSpec:
    return RequestSpec(
        "post",
        path,
        body={"token": credential.access_token, "refreshToken": credential.refresh_token},
        bypass_auth=True,
    )


def external_auth_request(path: str, body: object) -> RequestSpec:
    return RequestSpec("post", path, body=body, bypass_auth=True)


def build_refresh_fn(pipeline: RequestPipeline, *, path: str = REFRESH_PATH):
    """Return the coordinator's refresh call, bound to ``pipeline``.

    The refresh request is exempt, so its own 401 never re-enters the
    coordinator.
    """

    async def refresh(current: Credential | None) -> Credential:
        if current is None or not current.access_token or not current.refresh_token:
            raise AuthenticationError(messages=["No refresh token available"])
        payload = await pipeline.execute(refresh_request(current, path=path))
        return credential_from_payload(payload)

    return refresh

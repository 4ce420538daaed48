import client


EXPECTED_CLIENT_EXPORTS = (
    "APP_VERSION",
    "CLIENT_METHODS",
    "ApiClient",
    "ApiError",
    "AuthenticationError",
    "ClientSettings",
    "Credential",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "NetworkError",
    "RefreshCoordinator",
    "RefreshState",
    "RefreshTimeoutError",
    "RequestPipeline",
    "RequestSpec",
    "SessionClaims",
    "SessionManager",
    "UnexpectedError",
    "ValidationError",
    "build_client",
    "create_client",
    "load_env",
    "main",
    "normalize_error",
    "run_request",
    "setup_logging",
    "validate_env",
)


def test_client_export_surface() -> None:
    missing = [name for name in EXPECTED_CLIENT_EXPORTS if not hasattr(client, name)]
    assert missing == []

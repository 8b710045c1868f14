"""
Basic Instagram Client Usage Examples

Demonstrates OAuth code exchange, GET/POST/DELETE calls and error handling.
"""

from instagram_client import (
    APINotFoundError,
    ClientConfig,
    Instagram,
    InstagramClientException,
    OAuthRateLimitException,
)

CONFIG = ClientConfig(
    client_id="YOUR_CLIENT_ID",
    client_secret="YOUR_CLIENT_SECRET",
    client_ip="203.0.113.10",
    redirect_uri="https://example.com/instagram/callback",
)


def exchange_code(code: str) -> str:
    """Exchange the OAuth code from the redirect for an access token."""
    print("\n=== Authorize ===")

    with Instagram(CONFIG) as api:
        res = api.authorize(code)
        print(f"Logged in as: {api.current_user.get('username')}")
        return res.access_token


def search_users(access_token: str):
    """GET with query parameters and rate limit headers."""
    print("\n=== Search Users ===")

    with Instagram(CONFIG.with_access_token(access_token)) as api:
        res = api.get("/users/search", {"q": "snoopdogg", "count": 5})

        for user in res.data:
            print(f"  {user['id']}: {user['username']}")
        print(f"Rate limit: {res.remaining}/{res.limit}")


def like_and_unlike(access_token: str, media_id: str):
    """POST and DELETE with escaped path arguments."""
    print("\n=== Like / Unlike ===")

    with Instagram(CONFIG.with_access_token(access_token)) as api:
        path = Instagram.format_path("/media/%s/likes", media_id)
        api.post(path)
        api.delete(path)
        print("Done")


def error_handling(access_token: str):
    """Typed exceptions."""
    print("\n=== Error Handling ===")

    with Instagram(CONFIG.with_access_token(access_token)) as api:
        try:
            api.get("/users/0")
        except APINotFoundError as e:
            print(f"Not found: {e.message} (code {e.code})")
        except OAuthRateLimitException as e:
            print(f"Rate limited, retryable={e.retryable}")
        except InstagramClientException as e:
            print(f"{e.kind.value}: {e.message}")


if __name__ == "__main__":
    token = exchange_code("CODE_FROM_REDIRECT")
    search_users(token)
    like_and_unlike(token, "1234567890_1234")
    error_handling(token)

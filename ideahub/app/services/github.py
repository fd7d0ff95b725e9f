"""
GitHub account linking.

Exchanges an OAuth authorization code for an access token and pulls the
account profile plus a handful of recently updated repositories.
"""

import logging
from typing import Any

import httpx

from ideahub.app.core.config import settings
from ideahub.app.core.exceptions import GitHubServiceError

logger = logging.getLogger(__name__)


class GitHubProvider:
    """Thin async client for the GitHub OAuth and REST endpoints."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
    ):
        """
        Initialize GitHub provider.

        Args:
            client_id: OAuth app client ID
            client_secret: OAuth app client secret
            redirect_uri: Redirect URI registered with the OAuth app
            timeout: Per-request timeout in seconds
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.token_url = "https://github.com/login/oauth/access_token"
        self.api_url = "https://api.github.com"

    def _api_headers(self, access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github.v3+json",
        }

    async def exchange_code(self, code: str) -> str:
        """
        Exchange an OAuth code for an access token.

        Raises:
            httpx.HTTPError: If the request fails
            GitHubServiceError: If GitHub rejects the code
        """
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.token_url,
                headers={"Accept": "application/json"},
                json={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                    "redirect_uri": self.redirect_uri,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        if data.get("error"):
            raise GitHubServiceError(
                "token exchange",
                data.get("error_description") or data["error"],
            )
        access_token = data.get("access_token")
        if not access_token:
            raise GitHubServiceError("token exchange", "no access token returned")
        return access_token

    async def fetch_user(self, access_token: str) -> dict[str, Any]:
        """Fetch the authenticated user's profile."""
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/user",
                headers=self._api_headers(access_token),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()

    async def fetch_recent_repos(
        self,
        access_token: str,
        username: str,
        count: int = 5,
    ) -> list[dict[str, Any]]:
        """Fetch the user's most recently updated public repositories."""
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/users/{username}/repos",
                headers=self._api_headers(access_token),
                params={"sort": "updated", "per_page": count},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()[:count]


class GitHubService:
    """
    Service turning an OAuth code into the profile fields stored for a linked account.

    Examples:
        >>> service = GitHubService()
        >>> account = await service.fetch_account("oauth-code")
        >>> account["github_username"]
        'octocat'
    """

    def __init__(self, provider: GitHubProvider | None = None):
        if provider is None and settings.github_client_id and settings.github_client_secret:
            provider = GitHubProvider(
                client_id=settings.github_client_id,
                client_secret=settings.github_client_secret,
                redirect_uri=settings.github_redirect_uri,
                timeout=settings.github_timeout,
            )
        self.provider = provider

    async def fetch_account(self, code: str) -> dict[str, Any]:
        """
        Resolve an OAuth code into GitHub profile fields.

        Returns:
            Dict keyed by the profile's github_* column names

        Raises:
            GitHubServiceError: If GitHub is not configured or any call fails
        """
        if self.provider is None:
            raise GitHubServiceError("account linking", "GitHub OAuth is not configured")

        try:
            access_token = await self.provider.exchange_code(code)
            user = await self.provider.fetch_user(access_token)
            repos = await self.provider.fetch_recent_repos(access_token, user["login"])
            account = {
                "github_username": user["login"],
                "github_name": user.get("name"),
                "github_bio": user.get("bio"),
                "github_avatar": user.get("avatar_url"),
                "github_url": user.get("html_url"),
                "github_public_repos": user.get("public_repos"),
                "github_followers": user.get("followers"),
                "github_repos": [
                    {
                        "name": repo["name"],
                        "description": repo.get("description"),
                        "url": repo["html_url"],
                        "language": repo.get("language"),
                        "stars": repo.get("stargazers_count", 0),
                    }
                    for repo in repos
                ],
            }
        except httpx.HTTPError as e:
            logger.error(f"[GITHUB] Request failed: {e}")
            raise GitHubServiceError("account linking", e)
        except KeyError as e:
            logger.error(f"[GITHUB] Unexpected response, missing {e}")
            raise GitHubServiceError("account linking", f"unexpected response, missing {e}")

        logger.info(f"[GITHUB] Fetched account {user['login']} with {len(repos)} repos")
        return account


# Global service instance
_github_service: GitHubService | None = None


def get_github_service() -> GitHubService:
    """
    Get singleton GitHub service instance.

    Returns:
        Cached GitHubService instance
    """
    global _github_service
    if _github_service is None:
        _github_service = GitHubService()
    return _github_service

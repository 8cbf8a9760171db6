"""
Release feed handler for SDK repositories on GitHub.
New model ids tend to land in SDK releases and commits before any announcement.
"""

from typing import Optional, Dict, Any, List

from .base_handler import BaseHandler
from models.check_result import CheckResult

DEFAULT_REPOS = [
    'anthropics/anthropic-sdk-python',
    'anthropics/anthropic-sdk-typescript',
]
API_BASE = 'https://api.github.com'
GITHUB_ACCEPT = 'application/vnd.github.v3+json'


class ReleaseHandler(BaseHandler):
    """Handler for GitHub releases and commits of a fixed list of repositories."""

    def get_method_name(self) -> str:
        return "releases"

    @property
    def repos(self) -> List[str]:
        return self.config.get('repos') or DEFAULT_REPOS

    def _check(self) -> CheckResult:
        for repo in self.repos:
            try:
                result = self._check_repo(repo)
            except Exception as e:
                self.logger.warning(f"GitHub check failed ({repo}): {e}")
                continue
            if result:
                return result

        return CheckResult.not_found()

    def _check_repo(self, repo: str) -> Optional[CheckResult]:
        """Check releases, then commits, of one repository."""
        headers = {'Accept': GITHUB_ACCEPT}

        response = self.http_get(
            f"{API_BASE}/repos/{repo}/releases",
            headers=headers,
            params={'per_page': self.config.get('releases_per_page', 5)},
        )
        if not response.ok:
            self.logger.warning(f"Releases request for {repo} returned HTTP {response.status_code}")
            return None

        for release in response.json() or []:
            text = ' '.join(
                release.get(key) or '' for key in ('tag_name', 'name', 'body')
            )
            if self.classifier.classify(text):
                return CheckResult(
                    found=True,
                    model=self.classifier.extract_model_token(text),
                    source=release.get('html_url') or f"https://github.com/{repo}/releases",
                )

        response = self.http_get(
            f"{API_BASE}/repos/{repo}/commits",
            headers=headers,
            params={'per_page': self.config.get('commits_per_page', 10)},
        )
        if not response.ok:
            return None

        for commit in response.json() or []:
            message = (commit.get('commit') or {}).get('message') or ''
            if self.classifier.classify(message):
                return CheckResult(
                    found=True,
                    model=self.classifier.extract_model_token(message),
                    source=commit.get('html_url') or f"https://github.com/{repo}",
                )

        return None

"""Endpoint groups for the GitHub API.

Each module in this package implements one group of related endpoints.

Available endpoint groups:
    - caches: GitHub Actions cache usage and cache items
    - commit_comments: Comments on commits
    - contents: Files, READMEs and archives
    - orgs: Organizations and security features
    - repos: Repositories and Actions repository selection

"""

from github_manager.endpoints.base import BaseEndpoint
from github_manager.endpoints.caches import CachesEndpoint
from github_manager.endpoints.commit_comments import CommitCommentsEndpoint
from github_manager.endpoints.contents import ContentsEndpoint
from github_manager.endpoints.orgs import OrgsEndpoint
from github_manager.endpoints.repos import ReposEndpoint

__all__ = [
    "BaseEndpoint",
    "CachesEndpoint",
    "CommitCommentsEndpoint",
    "ContentsEndpoint",
    "OrgsEndpoint",
    "ReposEndpoint",
]

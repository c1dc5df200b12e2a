"""
LeetCode GraphQL client: problem catalog and recent accepted submissions.
"""

import logging
import sys
from typing import Any, Dict, List, Optional

import requests

from .config import LEETCODE_REFERER, LEETCODE_URL, SUBMISSION_LIMIT
from .models import Catalog, ProblemRecord, Submission

logger = logging.getLogger(__name__)

EXIT_AUTH_FAILED = 2

ALL_QUESTIONS_QUERY = "query { allQuestions { titleSlug questionId difficulty } }"

RECENT_AC_SUBMISSIONS_QUERY = """
query recentAcSubmissions($username: String!, $limit: Int!)
{
    recentAcSubmissionList(username: $username, limit: $limit)
    {
        id
        title
        titleSlug
        timestamp
    }
}"""


class LeetCodeError(Exception):
    """Unexpected response from the LeetCode GraphQL API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LeetCodeClient:
    def __init__(self, session_cookie: str, csrf_token: str,
                 url: str = LEETCODE_URL, referer: str = LEETCODE_REFERER,
                 session: Optional[requests.Session] = None, timeout: int = 10):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Referer': referer,
            'x-csrftoken': csrf_token,
            'Cookie': f"LEETCODE_SESSION={session_cookie}; csrftoken={csrf_token}",
        })

    @classmethod
    def from_settings(cls, settings) -> "LeetCodeClient":
        return cls(
            session_cookie=settings.leetcode_session_cookie,
            csrf_token=settings.leetcode_csrf_token,
            url=settings.leetcode_url,
            referer=settings.leetcode_referer,
        )

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        return self.session.post(self.url, json=payload, timeout=self.timeout)

    def fetch_catalog(self) -> Optional[Catalog]:
        """Load every problem as slug -> record.

        Failures are logged and reported as None so callers can fall back
        to bare titles.
        """
        try:
            response = self._post({'query': ALL_QUESTIONS_QUERY})
            if not response.ok:
                logger.error(f"❌ Failed to fetch questions: {response.status_code} {response.reason}")
                return None

            data = response.json()
            questions = (data.get('data') or {}).get('allQuestions') or []
            catalog = {}
            for question in questions:
                catalog[question['titleSlug']] = ProblemRecord(
                    slug=question['titleSlug'],
                    question_id=str(question['questionId']),
                    difficulty=question['difficulty'],
                )
            logger.info(f"✅ Loaded {len(questions)} questions.")
            return catalog
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as error:
            logger.error(f"❌ Error in fetch_catalog: {error}")
            return None

    def fetch_recent_submissions(self, username: str, limit: int = SUBMISSION_LIMIT) -> List[Submission]:
        """Most recent accepted submissions of a user, newest first.

        An expired session is not recoverable within a run, so HTTP 403
        terminates the process with EXIT_AUTH_FAILED.
        """
        payload = {
            'query': RECENT_AC_SUBMISSIONS_QUERY,
            'variables': {'username': username, 'limit': limit},
            'operationName': 'recentAcSubmissions',
        }
        response = self._post(payload)

        if response.status_code == 403:
            logger.warning("⚠️  Authentication failed. Cookie may have expired.")
            sys.exit(EXIT_AUTH_FAILED)

        if not response.ok:
            raise LeetCodeError(
                f"Failed to fetch submissions: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        data = response.json()
        if data.get('errors'):
            messages = '; '.join(e.get('message', str(e)) for e in data['errors'])
            raise LeetCodeError(f"GraphQL error: {messages}", status_code=response.status_code)

        items = (data.get('data') or {}).get('recentAcSubmissionList')
        if items is None:
            raise LeetCodeError("Response did not contain recentAcSubmissionList",
                                status_code=response.status_code)

        return [Submission.from_api(item) for item in items]

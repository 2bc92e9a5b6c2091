#!/usr/bin/env python3
"""
Smoke test for a running shortlinks deployment.

Walks the full link lifecycle against the live service: create, inspect,
redirect and click counting, listing, custom code conflicts, deletion and
the 404 that must follow it. Leaves no links behind on success.

Usage:
    python validate_service.py --url http://localhost:3000
"""

import argparse
import sys
import time
from datetime import datetime
from typing import Callable, List, Optional, Tuple

import requests


class ServiceValidator:
    """Validates shortlinks service functionality."""

    def __init__(self, base_url: str = "http://localhost:3000", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results: List[Tuple[str, bool]] = []
        self.created_codes: List[str] = []

    def print_header(self, text: str):
        print(f"\n{'=' * 60}")
        print(f"  {text}")
        print(f"{'=' * 60}\n")

    def record(self, name: str, passed: bool, details: str = "") -> bool:
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"[{status}] {name}")
        if details:
            print(f"       {details}")
        return passed

    def check(self, name: str, step: Callable[[], Tuple[bool, str]]) -> bool:
        """Run one step; connection problems count as a failure."""
        try:
            passed, details = step()
        except requests.RequestException as e:
            passed, details = False, f"Error: {e}"
        return self.record(name, passed, details)

    def _get(self, path: str, **kwargs) -> requests.Response:
        return self.session.get(f"{self.base_url}{path}", timeout=self.timeout, **kwargs)

    def _create(self, url: str, custom_code: Optional[str] = None) -> requests.Response:
        body = {"url": url}
        if custom_code:
            body["customCode"] = custom_code
        return self.session.post(f"{self.base_url}/api/links", json=body, timeout=self.timeout)

    def _delete(self, code: str) -> requests.Response:
        return self.session.delete(f"{self.base_url}/api/links/{code}", timeout=self.timeout)

    def test_liveness(self) -> Tuple[bool, str]:
        response = self._get("/healthz")
        data = response.json() if response.ok else {}
        return data.get("ok") is True, f"Status: {response.status_code}, version: {data.get('version')}"

    def test_readiness(self) -> Tuple[bool, str]:
        response = self._get("/api/health")
        data = response.json() if response.ok else {}
        return data.get("database") == "healthy", f"Database: {data.get('database', 'N/A')}"

    def test_create(self, url: str) -> Tuple[bool, str]:
        response = self._create(url)
        if response.status_code != 201:
            return False, f"Status: {response.status_code} (expected 201)"
        code = response.json()["data"]["short_code"]
        self.created_codes.append(code)
        return len(code) == 6, f"Code: {code}, short URL: {response.json()['shortUrl']}"

    def test_redirect(self, code: str, url: str) -> Tuple[bool, str]:
        response = self._get(f"/{code}", allow_redirects=False)
        location = response.headers.get("Location", "")
        return (
            response.status_code == 302 and location == url,
            f"Status: {response.status_code}, Location: {location or 'none'}",
        )

    def test_click_counted(self, code: str) -> Tuple[bool, str]:
        data = self._get(f"/api/links/{code}").json()
        return (
            data.get("clicks") == 1 and data.get("last_clicked") is not None,
            f"Clicks: {data.get('clicks')}, last clicked: {data.get('last_clicked')}",
        )

    def test_search(self, code: str) -> Tuple[bool, str]:
        response = self._get("/api/links", params={"search": code.upper(), "sort": "most-clicked"})
        codes = [link["short_code"] for link in response.json()] if response.ok else []
        return code in codes, f"Matches: {len(codes)}"

    def test_duplicate_custom_code(self) -> Tuple[bool, str]:
        custom_code = f"v{int(time.time()) % 10_000_000:07d}"
        first = self._create("https://example.com/custom", custom_code)
        if first.status_code != 201:
            return False, f"Create status: {first.status_code}"
        self.created_codes.append(custom_code)
        second = self._create("https://example.org/other", custom_code)
        return second.status_code == 409, f"Status: {second.status_code} (expected 409)"

    def test_invalid_url(self) -> Tuple[bool, str]:
        response = self._create("ftp://example.com/file")
        return response.status_code == 400, f"Status: {response.status_code} (expected 400)"

    def test_delete_then_404(self, code: str) -> Tuple[bool, str]:
        deleted = self._delete(code)
        if deleted.status_code != 200:
            return False, f"Delete status: {deleted.status_code}"
        self.created_codes.remove(code)
        redirect = self._get(f"/{code}", allow_redirects=False)
        return redirect.status_code == 404, f"Redirect after delete: {redirect.status_code} (expected 404)"

    def cleanup(self):
        for code in list(self.created_codes):
            try:
                self._delete(code)
            except requests.RequestException as e:
                print(f"Could not delete {code}: {e}")

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("shortlinks Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.check("Liveness", self.test_liveness):
            print(f"\nService is not reachable at {self.base_url}")
            return False
        self.check("Readiness", self.test_readiness)

        target = f"https://example.com/validate/{int(time.time())}"
        if self.check("Create Link", lambda: self.test_create(target)):
            code = self.created_codes[-1]
            self.check("Redirect", lambda: self.test_redirect(code, target))
            self.check("Click Counted", lambda: self.test_click_counted(code))
            self.check("Search", lambda: self.test_search(code))
            self.check("Delete Then 404", lambda: self.test_delete_then_404(code))

        self.check("Duplicate Code Rejection", self.test_duplicate_custom_code)
        self.check("Invalid URL Rejection", self.test_invalid_url)

        self.cleanup()
        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {total - passed}")

        for name, ok in self.test_results:
            if not ok:
                print(f"   - {name}")
        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Validate shortlinks service functionality")
    parser.add_argument(
        "--url",
        default="http://localhost:3000",
        help="Base URL of the service (default: http://localhost:3000)"
    )
    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_tests()
    except KeyboardInterrupt:
        print("\nValidation interrupted by user")
        sys.exit(2)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

"""HTTP GET healthcheck and its response expectations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, ClassVar, Dict, List, Tuple, Union

from kubecheck.domain.checks.base import (
    Expectation,
    Healthcheck,
    format_duration,
)
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.http import HttpObservation
from kubecheck.domain.ports.http_client import IHttpClient
from kubecheck.shared.urls import clean_url

BODY_PREVIEW_LENGTH = 50
TRIMMED_MARKER = "...[TRIMMED]"


@dataclass(frozen=True, slots=True)
class HttpExpectationContext:
    observation: HttpObservation
    now: datetime

    @property
    def response_time(self) -> timedelta:
        return self.observation.elapsed


class HttpResponseExpectation(Expectation):
    """Expectation verified against an :class:`HttpExpectationContext`."""


@dataclass(frozen=True, kw_only=True)
class HttpGetHealthcheck(Healthcheck):
    """Performs a single HTTP GET request against ``url``."""

    kind: ClassVar[str] = "http-get"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (HttpResponseExpectation,)

    url: str
    http_client: IHttpClient

    def build_input(self) -> Dict[str, Any]:
        return {"url": clean_url(self.url)}

    async def observe(self) -> HttpObservation:
        return await self.http_client.get(self.url)

    def build_context(self, observation: HttpObservation, now: datetime) -> HttpExpectationContext:
        return HttpExpectationContext(observation=observation, now=now)


@dataclass(frozen=True)
class HttpStatusCodeExpectation(HttpResponseExpectation):
    min_status_code: int
    max_status_code: int

    def verify(self, context: HttpExpectationContext) -> List[AssertionGroup]:
        group = AssertionGroup("HTTPStatusCode")
        status_code = context.observation.status_code

        if self.min_status_code == self.max_status_code:
            group.record(
                "Equals",
                status_code == self.min_status_code,
                self.min_status_code,
                status_code,
            )
        else:
            group.record(
                "InRange",
                self.min_status_code <= status_code <= self.max_status_code,
                f"min={self.min_status_code} max={self.max_status_code}",
                status_code,
            )

        return [group]


@dataclass(frozen=True)
class HttpResponseBodyExpectation(HttpResponseExpectation):
    expected: str
    exact_match: bool = False

    def verify(self, context: HttpExpectationContext) -> List[AssertionGroup]:
        group = AssertionGroup("HTTPResponseBody")
        body = context.observation.body
        preview = truncate_body(body)

        if self.exact_match:
            group.record("Equals", body == self.expected, self.expected, preview)
        else:
            group.record("Contains", self.expected in body, self.expected, preview)

        return [group]


@dataclass(frozen=True)
class HttpResponseHeaderExpectation(HttpResponseExpectation):
    header: str
    expected: str

    def verify(self, context: HttpExpectationContext) -> List[AssertionGroup]:
        group = AssertionGroup("HTTPResponseHeader", self.header)
        actual = context.observation.header(self.header)
        group.record("Equals", actual == self.expected, self.expected, actual)
        return [group]


@dataclass(frozen=True)
class HttpResponseTimeExpectation(HttpResponseExpectation):
    expected: timedelta

    def verify(self, context: HttpExpectationContext) -> List[AssertionGroup]:
        group = AssertionGroup("ResponseTime")
        group.record(
            "LessThan",
            context.response_time <= self.expected,
            format_duration(self.expected),
            format_duration(context.response_time),
        )
        return [group]


@dataclass(frozen=True)
class HttpCertificateExpectation(HttpResponseExpectation):
    expires_after_days: int

    def verify(self, context: HttpExpectationContext) -> List[AssertionGroup]:
        certificates = context.observation.certificates

        if not certificates:
            group = AssertionGroup("Certificate")
            group.record("HasValue", False, True, False)
            return [group]

        groups = []
        for certificate in certificates:
            group = AssertionGroup(
                "Certificate",
                {"subject": certificate.subject, "issuer": certificate.issuer},
            )
            if self.expires_after_days > 0:
                days_left = certificate.expires_in_days(context.now)
                group.record(
                    "Expires",
                    days_left >= self.expires_after_days,
                    f"after {self.expires_after_days} days",
                    f"in {days_left} days",
                )
            groups.append(group)

        return groups


def truncate_body(body: str) -> str:
    """Shorten a body for diagnostics so responses are never echoed in full."""
    if len(body) > BODY_PREVIEW_LENGTH:
        return f"{body[:BODY_PREVIEW_LENGTH]}{TRIMMED_MARKER}"
    return body


def expect_status_code(expected: int) -> HttpStatusCodeExpectation:
    return HttpStatusCodeExpectation(expected, expected)


def expect_status_code_range(min_status: int, max_status: int) -> HttpStatusCodeExpectation:
    return HttpStatusCodeExpectation(min_status, max_status)


def expect_status_code_success() -> HttpStatusCodeExpectation:
    """Any informational or successful status (100-299)."""
    return HttpStatusCodeExpectation(100, 299)


def expect_body_equals(expected: str) -> HttpResponseBodyExpectation:
    return HttpResponseBodyExpectation(expected, exact_match=True)


def expect_body_contains(expected: str) -> HttpResponseBodyExpectation:
    return HttpResponseBodyExpectation(expected, exact_match=False)


def expect_header(header: str, expected: str) -> HttpResponseHeaderExpectation:
    return HttpResponseHeaderExpectation(header, expected)


def expect_response_in(duration: Union[timedelta, float]) -> HttpResponseTimeExpectation:
    """Response time ceiling, as a timedelta or a number of seconds."""
    if not isinstance(duration, timedelta):
        duration = timedelta(seconds=duration)
    return HttpResponseTimeExpectation(duration)


def expect_valid_certificate(expires_after_days: int) -> HttpCertificateExpectation:
    return HttpCertificateExpectation(expires_after_days)

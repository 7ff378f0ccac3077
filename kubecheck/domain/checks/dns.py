"""DNS lookup healthcheck."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Tuple

from kubecheck.domain.checks.base import Expectation, Healthcheck
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.ports.resolver import IResolver


@dataclass(frozen=True, slots=True)
class DnsExpectationContext:
    host: str
    addresses: Tuple[str, ...]


class DnsLookupExpectation(Expectation):
    """Expectation verified against a :class:`DnsExpectationContext`."""


@dataclass(frozen=True, kw_only=True)
class DnsLookupHealthcheck(Healthcheck):
    """Verifies that ``host`` can be resolved."""

    kind: ClassVar[str] = "dns-lookup"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (DnsLookupExpectation,)

    host: str
    resolver: IResolver

    def build_input(self) -> Dict[str, Any]:
        return {"host": self.host}

    async def observe(self) -> List[str]:
        return await self.resolver.resolve(self.host)

    def build_context(self, observation: List[str], now: datetime) -> DnsExpectationContext:
        return DnsExpectationContext(host=self.host, addresses=tuple(observation))


@dataclass(frozen=True)
class DnsLookupAddrExpectation(DnsLookupExpectation):
    expected: Tuple[str, ...]

    def verify(self, context: DnsExpectationContext) -> List[AssertionGroup]:
        group = AssertionGroup("DNSLookupAddr")
        resolved = list(context.addresses)
        for address in self.expected:
            group.record("Contains", address in context.addresses, address, resolved)
        return [group]


def expect_addrs(*addresses: str) -> DnsLookupAddrExpectation:
    return DnsLookupAddrExpectation(tuple(addresses))

"""Deterministic compliance rules for private console access templates.

Each check takes the template and region and returns its own list of
records. Checks never look at each other's output and never raise: missing
or mistyped properties count as absent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from consolecheck.template.models import (
    GATEWAY_ENDPOINT,
    INTERFACE_ENDPOINT,
    MappingValue,
    Resource,
    SequenceValue,
    Template,
    Value,
    is_truthy,
    literal,
)
from consolecheck.template.resolver import resolve
from consolecheck.validator.models import Check, CheckStatus

logger = logging.getLogger(__name__)

REQUIRED_INTERFACE_ENDPOINTS = ["console", "signin", "ssm", "ec2messages", "ssmmessages"]

REQUIRED_HOSTED_ZONES = ["console.aws.amazon.com", "signin.aws.amazon.com"]

STORAGE_SERVICE = "s3"

HTTPS_PORT = 443

ACCOUNT_CONDITION_KEY = "aws:PrincipalAccount"

Rule = Callable[[Template, str], list[Check]]


def _record(
    name: str,
    found: bool,
    pass_message: str,
    miss_message: str,
    miss_status: CheckStatus = CheckStatus.failed,
    details: str | None = None,
) -> Check:
    return Check(
        name=name,
        status=CheckStatus.passed if found else miss_status,
        message=pass_message if found else miss_message,
        details=details,
    )


def _service_name(resource: Resource, region: str) -> str | None:
    return resolve(resource.prop("ServiceName"), region)


def _mapping(value: Value | None) -> MappingValue | None:
    return value if isinstance(value, MappingValue) else None


def _items(value: Value | None) -> tuple[Value, ...]:
    if isinstance(value, SequenceValue):
        return value.items
    if isinstance(value, MappingValue):
        return (value,)
    return ()


def _equals_number(value: Value | None, expected: int) -> bool:
    raw = literal(value)
    return isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw == expected


def check_interface_endpoints(template: Template, region: str) -> list[Check]:
    """One record per required interface endpoint, matched on service name."""
    checks: list[Check] = []
    service_names = [
        _service_name(e, region) for e in template.vpc_endpoints(INTERFACE_ENDPOINT)
    ]

    for item in REQUIRED_INTERFACE_ENDPOINTS:
        expected = f"com.amazonaws.{region}.{item}"
        found = any(name is not None and expected in name for name in service_names)
        checks.append(
            _record(
                f"VPC Endpoint: {item}",
                found,
                f"Interface VPC endpoint for {item} found",
                f"Missing interface VPC endpoint for {item}",
            )
        )
    return checks


def check_storage_gateway(template: Template, region: str) -> list[Check]:
    """The S3 gateway endpoint keeps object storage traffic private."""
    found = any(
        STORAGE_SERVICE in (_service_name(e, region) or "")
        for e in template.vpc_endpoints(GATEWAY_ENDPOINT)
    )
    return [
        _record(
            "VPC Endpoint: S3 Gateway",
            found,
            "S3 Gateway VPC endpoint found",
            "Missing S3 Gateway VPC endpoint",
        )
    ]


def describe_policy(policy: Value | None) -> str:
    """Summarise an endpoint policy document.

    Only the first statement is inspected, so a restrictive condition on a
    later statement is reported as unrestricted.
    """
    document = _mapping(policy)
    statements = _items(document.get("Statement")) if document is not None else ()
    if not statements:
        return "no statements"

    first = _mapping(statements[0])
    condition = _mapping(first.get("Condition")) if first is not None else None
    string_equals = _mapping(condition.get("StringEquals")) if condition is not None else None
    if string_equals is not None and is_truthy(string_equals.get(ACCOUNT_CONDITION_KEY)):
        return "restricts access to specific account(s)"

    return "does not restrict access by account"


def check_endpoint_settings(template: Template, region: str) -> list[Check]:
    """Policy and private DNS records for every interface endpoint."""
    checks: list[Check] = []

    for endpoint in template.vpc_endpoints(INTERFACE_ENDPOINT):
        label = _service_name(endpoint, region) or endpoint.logical_id
        policy = endpoint.prop("PolicyDocument")
        # an attached but empty document still counts; it just has no statements
        has_policy = isinstance(policy, MappingValue) or is_truthy(policy)

        checks.append(
            _record(
                f"Endpoint Policy: {label}",
                has_policy,
                f"{label} endpoint has a policy attached",
                f"{label} endpoint is missing a policy",
                details=describe_policy(policy) if has_policy else None,
            )
        )
        checks.append(
            _record(
                f"Private DNS: {label}",
                is_truthy(endpoint.prop("PrivateDnsEnabled")),
                f"{label} endpoint has private DNS enabled",
                f"{label} endpoint does not have private DNS enabled",
            )
        )
    return checks


def check_hosted_zones(template: Template, region: str) -> list[Check]:
    """Private hosted zones that override the public console domains."""
    checks: list[Check] = []
    zone_names = {
        resolve(zone.prop("Name"), region)
        for zone in template.of_type("AWS::Route53::HostedZone")
    }

    for zone in REQUIRED_HOSTED_ZONES:
        # Route53 zone names may carry a trailing dot
        found = zone in zone_names or f"{zone}." in zone_names
        checks.append(
            _record(
                f"Route53 Hosted Zone: {zone}",
                found,
                f"Private hosted zone for {zone} found",
                f"Missing private hosted zone for {zone}",
            )
        )
    return checks


def check_dns_records(template: Template, region: str) -> list[Check]:
    count = len(template.of_type("AWS::Route53::RecordSet"))
    return [
        _record(
            "Route53 Records",
            count > 0,
            f"Found {count} Route53 records",
            "No Route53 records found",
            miss_status=CheckStatus.warning,
        )
    ]


def _allows_https(rule: Value) -> bool:
    # Any tcp rule satisfies both halves; kept as-is until the intended
    # port/protocol combination is confirmed.
    entries = _mapping(rule)
    if entries is None:
        return False
    is_tcp = literal(entries.get("IpProtocol")) == "tcp"
    return (_equals_number(entries.get("FromPort"), HTTPS_PORT) or is_tcp) and (
        _equals_number(entries.get("ToPort"), HTTPS_PORT) or is_tcp
    )


def check_https_ingress(template: Template, region: str) -> list[Check]:
    found = any(
        _allows_https(rule)
        for group in template.of_type("AWS::EC2::SecurityGroup")
        for rule in _items(group.prop("SecurityGroupIngress"))
    )
    return [
        _record(
            "Security Group: HTTPS Access",
            found,
            "Security group allows HTTPS (port 443) traffic",
            "No security group rule found for HTTPS (port 443)",
            miss_status=CheckStatus.warning,
        )
    ]


def check_instance(template: Template, region: str) -> list[Check]:
    """The test instance is optional; its role profile only matters if present."""
    instances = template.of_type("AWS::EC2::Instance")
    checks = [
        _record(
            "EC2 Instance",
            bool(instances),
            "EC2 instance found",
            "No EC2 instance found (optional)",
            miss_status=CheckStatus.warning,
        )
    ]
    if instances:
        checks.append(
            _record(
                "EC2 IAM Role",
                is_truthy(instances[0].prop("IamInstanceProfile")),
                "EC2 instance has IAM instance profile",
                "EC2 instance missing IAM instance profile",
                miss_status=CheckStatus.warning,
            )
        )
    return checks


def check_nat_gateway(template: Template, region: str) -> list[Check]:
    return [
        _record(
            "NAT Gateway",
            bool(template.of_type("AWS::EC2::NatGateway")),
            "NAT Gateway found for private subnet egress",
            "No NAT Gateway found (required for private subnet internet access)",
            miss_status=CheckStatus.warning,
        )
    ]


def check_network_layout(template: Template, region: str) -> list[Check]:
    private_subnets = [
        s for s in template.of_type("AWS::EC2::Subnet")
        if not is_truthy(s.prop("MapPublicIpOnLaunch"))
    ]
    route_tables = template.of_type("AWS::EC2::RouteTable")
    return [
        _record(
            "Private Subnets",
            bool(private_subnets),
            f"Found {len(private_subnets)} private subnet(s)",
            "No private subnets found",
        ),
        _record(
            "Route Tables",
            bool(route_tables),
            f"Found {len(route_tables)} route table(s)",
            "No route tables found",
            miss_status=CheckStatus.warning,
        ),
    ]


RULES: list[Rule] = [
    check_interface_endpoints,
    check_storage_gateway,
    check_endpoint_settings,
    check_hosted_zones,
    check_dns_records,
    check_https_ingress,
    check_instance,
    check_nat_gateway,
    check_network_layout,
]


def run_all_rules(template: Template, region: str) -> list[Check]:
    """Run every rule in order and concatenate their records."""
    checks: list[Check] = []
    for rule in RULES:
        produced = rule(template, region)
        logger.debug("%s produced %d check(s)", rule.__name__, len(produced))
        checks.extend(produced)
    return checks

"""Region code to S3 endpoint resolution."""

from types import MappingProxyType
from typing import Mapping, Optional

from .protocols import LoggerProtocol

REGION_TO_ENDPOINT: Mapping[str, str] = MappingProxyType(
    {
        "EU": "s3-eu-west-1.amazonaws.com",
        "us-west-1": "s3-us-west-1.amazonaws.com",
        "us-west-2": "s3-us-west-2.amazonaws.com",
        "ap-southeast-1": "s3-ap-southeast-1.amazonaws.com",
        "ap-northeast-1": "s3-ap-northeast-1.amazonaws.com",
        "sa-east-1": "sa-east-1.amazonaws.com",
    }
)

# SigV4 needs a real region name; "EU" is the legacy location constraint.
_SIGNING_REGIONS: Mapping[str, str] = MappingProxyType({"EU": "eu-west-1"})


def resolve_endpoint(
    region: Optional[str], logger: Optional[LoggerProtocol] = None
) -> Optional[str]:
    """
    Map a configured region to the endpoint host the client should use.

    Args:
        region: Region code from the job, or None
        logger: Receives a warning when the region is not in the table

    Returns:
        None when no region is configured (client default endpoint),
        the table's host for a known code, else the region string itself.
    """
    if region is None:
        return None

    endpoint = REGION_TO_ENDPOINT.get(region)
    if endpoint is not None:
        return endpoint

    if logger is not None:
        logger.warning(
            f"Region {region} given but not found in the region to endpoint map. "
            "Will use it as an endpoint"
        )
    return region


def signing_region(region: Optional[str]) -> Optional[str]:
    """Region name boto3 should sign requests for, None if unknown."""
    if region is None or region not in REGION_TO_ENDPOINT:
        return None
    return _SIGNING_REGIONS.get(region, region)


def endpoint_url(host: Optional[str]) -> Optional[str]:
    """Turn an endpoint host into the URL boto3 expects."""
    if host is None:
        return None
    if "://" in host:
        return host
    return f"https://{host}"

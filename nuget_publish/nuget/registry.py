"""NuGet registry queries.

Uses the flat-container resource of the NuGet v3 API:
GET {source}/v3-flatcontainer/{id}/index.json returns
{"versions": ["1.0.0", "1.0.1", ...]} for a known package and 404 for
an unknown one.
"""

import http.client
import json
import urllib.error
import urllib.request

from nuget_publish import __version__
from nuget_publish.exceptions import NetworkError
from nuget_publish.log import Log

USER_AGENT = f"nuget-publish/{__version__}"


def index_url(source: str, package_name: str) -> str:
    """Flat-container version index URL. Package ids are lowercased."""
    return f"{source.rstrip('/')}/v3-flatcontainer/{package_name.lower()}/index.json"


def parse_versions(body: bytes) -> list[str]:
    """Parse a version index document.

    Raises:
        NetworkError: If the body is not {"versions": [str, ...]}
    """
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise NetworkError(
            "NuGet server returned an invalid version index",
            details=str(e),
        ) from e

    versions = data.get("versions") if isinstance(data, dict) else None
    if not isinstance(versions, list) or not all(isinstance(v, str) for v in versions):
        raise NetworkError(
            "NuGet server returned an invalid version index",
            details='Expected a JSON object with a "versions" list of strings',
        )
    return versions


def package_version_exists(
    source: str,
    package_name: str,
    version: str,
    log: Log,
) -> bool:
    """Check whether a package version is already on the registry.

    Args:
        source: Registry base URL
        package_name: Package id
        version: Version to look for
        log: Logger

    Returns:
        False if the registry does not know the package (404),
        otherwise whether version is in its version list

    Raises:
        NetworkError: On any other status, a network failure or a
            malformed response
    """
    url = index_url(source, package_name)
    log.info(f'Checking if NuGet package exists on NuGet server: "{url}"')

    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        with urllib.request.urlopen(req) as response:
            status = response.status
            body = response.read()
    except urllib.error.HTTPError as e:
        if e.code == 404:
            log.debug(
                f'NuGet server returned HTTP status code 404: Package "{package_name}" does not exist.'
            )
            return False
        raise NetworkError(
            f"NuGet server returned unexpected HTTP status code {e.code}: {e.reason}",
            details=f"GET {url}",
            fix_hint="Check the NUGET_SOURCE input and the registry status",
        ) from e
    except urllib.error.URLError as e:
        raise NetworkError(
            f"Unable to reach NuGet server: {e.reason}",
            details=f"GET {url}",
            fix_hint="Check the NUGET_SOURCE input and network connectivity",
        ) from e
    except OSError as e:
        raise NetworkError(
            f"Connection to NuGet server failed: {e}",
            details=f"GET {url}",
        ) from e
    except (http.client.HTTPException, ValueError) as e:
        # Truncated responses and URLs http.client refuses to send
        raise NetworkError(
            f"Request to NuGet server failed: {e!r}",
            details=f"GET {url}",
            fix_hint="Check the NUGET_SOURCE input",
        ) from e

    if status != 200:
        raise NetworkError(
            f"NuGet server returned unexpected HTTP status code {status}",
            details=f"GET {url}",
        )

    versions = parse_versions(body)
    # The index lists normalized, lowercased versions
    exists = version.lower() in (v.lower() for v in versions)
    log.debug(
        f"NuGet server returned: {len(versions)} package versions. "
        f'Package version "{version}" is{"" if exists else " not"} in list.'
    )
    return exists

"""External API clients.

Naming convention:
- *_client.py: HTTP integration layer
- operation modules (projects.py, builds.py): resource listings
"""

from .teamcity import TeamCity

__all__ = ["TeamCity"]

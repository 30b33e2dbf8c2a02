"""
Discovery data structures and models
"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass

@dataclass(frozen=True)
class Device:
    """A ScalarWebAPI device resolved from one interface information entry"""
    id: str
    display_name: str
    product: str
    model: str
    hostname: str

    def to_dict(self) -> Dict[str, str]:
        """Wire form with camelCase keys"""
        return {
            'id': self.id,
            'displayName': self.display_name,
            'product': self.product,
            'model': self.model,
            'hostname': self.hostname,
        }

@dataclass(frozen=True)
class SsdpResponse:
    """A single M-SEARCH reply"""
    location: str
    st: str
    usn: str
    server: Optional[str] = None
    sender: Optional[Tuple[str, int]] = None

@dataclass
class DiscoveryResult:
    """Results from a discovery run"""
    devices: List[Device]
    method: str
    duration_seconds: float
    hosts_queried: int
    success_count: int

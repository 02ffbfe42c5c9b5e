from dataclasses import dataclass, field
from typing import Any, Dict


# Codec option carrying the JSONP callback name.
OPTION_KEY_CLIENT_CALLBACK = "options.client.callback"


@dataclass(frozen=True)
class NegotiationResult:
    """Content type chosen for one request plus the options its codec needs."""

    target_content_type: str
    codec_options: Dict[str, Any] = field(default_factory=dict)

    @property
    def callback(self):
        return self.codec_options.get(OPTION_KEY_CLIENT_CALLBACK)

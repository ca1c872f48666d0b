"""Detection rules run against a single fetched page."""

from .content import check_information_disclosure
from .deep import check_extended
from .forms import check_form, check_forms
from .headers import check_security_headers
from .markup import check_script_injection
from .protocol import check_protocol

__all__ = [
    "check_extended",
    "check_form",
    "check_forms",
    "check_information_disclosure",
    "check_protocol",
    "check_script_injection",
    "check_security_headers",
]

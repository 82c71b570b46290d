"""
Riskwell Underwriting Core
==========================

Risk scoring, premium calculation, policy issuance and claim lifecycle
rules for an insurance platform.

The package is a pure decision core: it consumes plain records and returns
computed results or validated state transitions. Persistence, transport and
notification delivery belong to the calling service.
"""

__version__ = "0.1.0"
__author__ = "Riskwell"

"""
SERENE - Conversational Anxiety Support Engine

This package provides the text-signal analysis and session stage engine
behind the SERENE anxiety-support companion: anxiety scoring, multi-trigger
detection, context-aware reconciliation and the guided-session stage machine.

IMPORTANT: This is a wellbeing support system, not a diagnostic tool.
Emergency language is always treated as dispositive.
"""

__version__ = "0.1.0"
__author__ = "SERENE Engineering Team"

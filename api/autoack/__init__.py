"""
Automatic acknowledgement rules.

Decides whether an email address should receive an automatic acknowledgement
under a user rule set (inclusions, exclusions, organizational domain) and
explains the decision in plain language.

Components:
- pipeline/wildcard.py: wildcard pattern compiler
- pipeline/decision.py: precedence-ordered decision engine
- pipeline/explain.py: verdict explanations
- pipeline/rules_input.py: rule list cleanup and validation
- pipeline/simulate.py: validation -> decision -> explanation orchestration
"""

__version__ = "1.0.0"

"""Data access managers for the agent-state service.

Modules provide async functions that encapsulate persistence and business
rules.  Managers accept ``AsyncSession`` as a parameter and raise domain
exceptions from ``switchboard.shared.errors``, never HTTP exceptions --
rendering them is the app's responsibility.
"""

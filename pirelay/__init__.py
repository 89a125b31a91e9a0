"""Backend package: email table, PI matching, search relay and API.

Loads the PI email report once at startup and enriches NIH RePORTER search
results with investigator contact emails.
"""

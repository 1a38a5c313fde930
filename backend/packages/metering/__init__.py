"""
Metering package - plan tiers, usage counting and quota enforcement.

Every places search is admitted through AdmissionGate, which checks the
account's window usage via QuotaEvaluator and records one consumption
event per successful search. Reporting reuses the same evaluator.
"""

"""Generate azapi Terraform configurations from Azure REST API examples and report on plans, states, logs and errors."""

__version__ = "0.11.0"
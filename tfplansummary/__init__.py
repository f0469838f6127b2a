"""Console tables summarising Terraform/Terragrunt JSON plan files."""

__version__ = "0.1.0"
__all__ = ["__version__"]
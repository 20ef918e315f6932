"""Core domain types shared by calculators, services and adapters."""

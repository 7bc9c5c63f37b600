"""
Application Layer for the training schedule service.

This package contains:
- ports/: Abstract interfaces (key-value store, clock)
- use_cases/: TrainingStore and the use cases built on it
- exceptions: PersistenceError, PlanValidationError
"""

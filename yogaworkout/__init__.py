"""
Yoga Workout Backend — Application Package
============================================

Layered like this:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, image lifecycle, envelopes
    ├─────────────────────────────────────┤
    │   Repositories (MongoDB access)     │  ← one class per collection
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← stored documents vs API contracts
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

# Services package init
"""
Yoga Workout Backend — Services Layer
=======================================

What:  Business logic between routes (HTTP) and repositories (persistence).
How:   Services validate input, call repositories, turn "no record" into
       NotFoundError and shape the response envelope. Routes stay thin.

Service Inventory:
    - BlobStore (abstract): Interface for image storage
    - LocalFileStore: Disk-backed BlobStore with path traversal guard
    - SessionService: user/session/device check producing a SessionContext
    - StretchService: stretch CRUD, status change, image lifecycle
    - WeekService: week CRUD and listing by challenge
    - CustomPlanService: a user's plans with exercise counts
"""

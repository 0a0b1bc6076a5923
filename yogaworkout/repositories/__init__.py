# Repositories package init
"""
Yoga Workout Backend — Record Access Layer
============================================

What:  One repository per entity kind, each wrapping a motor collection.
How:   Repositories speak in document models (yogaworkout/models) and raw
       ObjectIds; they know nothing about HTTP. Driver failures leave this
       layer as DatabaseError.

Repository Inventory:
    - StretchRepository:    list / create / update / status / delete (+ image cleanup)
    - WeekRepository:       list / list by challenge (+ challenge join) / create / update / delete
    - CustomPlanRepository: list by user / exercise counts
"""

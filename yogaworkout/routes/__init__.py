# Routes package init
"""
Yoga Workout Backend — API Routes Package
===========================================

What:  HTTP route handlers. Paths match the legacy mobile API.

Route Inventory:
    - stretches.py:     GET /stretches, POST /addstretches, POST /updatestretches/{id},
                        DELETE /stretches/{id}, POST /changeStretchesStatus
    - weeks.py:         POST /addWeek, GET /getWeeks, GET /getWeeksByChallengesId/{id},
                        POST /updateWeek/{id}, DELETE /deleteWeek/{id}
    - custom_plans.py:  POST /getcustomplan (session-gated)
    - files.py:         GET /uploads/{key} (stored images)
    - health.py:        GET /health

Routes are THIN: pull values out of the request, call a service, return
its envelope. Errors are raised, never formatted here (see main.py).
"""

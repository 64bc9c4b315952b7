# Routes package init
"""
TripPlanner Backend: API Routes Package
=========================================

Route Inventory (all under /api):
    - trips.py:          /trips, /trips/search, /trips/by-destination/{id},
                         /trips/{id}/destinations[/{destinationId}],
                         /trips/{id}/packing-items
    - destinations.py:   /destinations, /destinations/{id}/trips,
                         /destinations/{id}/fuel-stations
    - packing_items.py:  /packing-items
    - diary.py:          /users/{userId}/tags, /users/{userId}/diary-entries
    - health.py:         /health

Routes stay thin: extract input, call one service method, pick the status
code. Rules live in app.services.
"""

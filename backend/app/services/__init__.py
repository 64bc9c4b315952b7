# Services package init
"""
TripPlanner Backend: Services Layer
=====================================

What:  Business rules between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP, services handle rules, repositories handle SQL.
How:   Services receive their repositories (and the fuel-station provider)
       through their constructors; the container in app.container builds
       them once per process.

Service Inventory:
    - TripService:          trips, search, trip/destination associations
    - DestinationService:   destinations and the trips visiting them
    - PackingItemService:   packing items of a trip
    - FuelStationService:   fuel stations around a destination
    - DiaryService:         per-user diary entries and tags
    - FuelStationProvider (abstract) / GeoapifyService: places lookup
"""

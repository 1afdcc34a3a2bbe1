# Services package init
"""
Portfolio API Backend: Services Layer
=====================================

What:  Persistence and business rules between routes (HTTP) and MongoDB.
How:   Services take validated models, run collection operations and
       translate driver failures into application exceptions. They are
       injected into routes via FastAPI's dependency injection.

Service Inventory:
    - DocumentService: shared list/get/insert/update/delete for one collection
    - PortfolioService: portfolio items, with type filtering
    - BlogService: blog posts, with excerpt derivation
    - ContactService: contact form submissions
    - SettingsService: key/value site settings (upsert by key)
    - UploadService: image files written under the upload directory
"""

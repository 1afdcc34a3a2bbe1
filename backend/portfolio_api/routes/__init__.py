# Routes package init
"""
Portfolio API Backend: API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module owns one resource and delegates to its service.

Route Inventory:
    - portfolio.py: GET/POST /api/portfolio, GET/PUT/DELETE /api/portfolio/{id}
    - blog.py:      GET/POST /api/blog,      GET/PUT/DELETE /api/blog/{id}
    - contact.py:   GET/POST /api/contact
    - settings.py:  GET/POST /api/settings
    - health.py:    GET /api/health, GET /
    - client.py:    GET /* (built client, production only)
    - forms.py:     multipart helpers shared by portfolio and blog

Routes stay thin: parse the request, call the service, shape the response.
"""

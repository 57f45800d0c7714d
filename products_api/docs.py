"""OpenAPI metadata and the Swagger UI page served at /docs."""
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse

TITLE = "Products REST API"
VERSION = "1.0.0"
DESCRIPTION = "API Docs for Production"
SITE_TITLE = "Products REST API Docs"

OPENAPI_TAGS = [
    {
        "name": "Products",
        "description": "API operations related to products",
    },
]

SWAGGER_UI_PARAMETERS = {
    "docExpansion": "list",
    "defaultModelsExpandDepth": 1,
    "displayRequestDuration": True,
}

CUSTOM_CSS = """
.swagger-ui .topbar { background-color: #DBDBDB; }
.swagger-ui .topbar a { max-width: 90px !important; }
"""


def swagger_ui_page(openapi_url: str) -> HTMLResponse:
    page = get_swagger_ui_html(
        openapi_url=openapi_url,
        title=SITE_TITLE,
        swagger_ui_parameters=SWAGGER_UI_PARAMETERS,
    )
    html = page.body.decode().replace(
        "</head>", f"<style>{CUSTOM_CSS}</style>\n</head>", 1
    )
    return HTMLResponse(html)

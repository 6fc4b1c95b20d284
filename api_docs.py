"""
OpenAPI document and Swagger UI page for the intensity API.
"""

OPENAPI_URL = "/api-docs/openapi.json"

OPENAPI_DOCUMENT = {
    "openapi": "3.0.3",
    "info": {
        "title": "Web Image Intensity Calculator API",
        "description": "A REST API for calculating the average intensity of uploaded images",
        "version": "1.0.0",
    },
    "tags": [
        {"name": "Image Processing", "description": "Image intensity calculation API"},
        {"name": "Health"},
    ],
    "paths": {
        "/calculate-intensity": {
            "post": {
                "tags": ["Image Processing"],
                "operationId": "calculate_intensity",
                "requestBody": {
                    "description": "Image file uploaded as multipart/form-data with field name 'image'",
                    "required": True,
                    "content": {
                        "multipart/form-data": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "image": {"type": "string", "format": "binary"},
                                },
                                "required": ["image"],
                            }
                        }
                    },
                },
                "responses": {
                    "200": {
                        "description": "Successfully calculated image intensity",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/IntensityResponse"}
                            }
                        },
                    },
                    "400": {
                        "description": "Bad request - invalid or missing image data",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ErrorResponse"}
                            }
                        },
                    },
                    "413": {
                        "description": "Payload too large - uploads are limited to 16 MB",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ErrorResponse"}
                            }
                        },
                    },
                    "422": {
                        "description": "Unprocessable entity - invalid image format",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ErrorResponse"}
                            }
                        },
                    },
                },
            }
        },
        "/health": {
            "get": {
                "tags": ["Health"],
                "operationId": "health_check",
                "responses": {
                    "200": {
                        "description": "Service is healthy",
                        "content": {"text/plain": {"schema": {"type": "string", "example": "OK"}}},
                    }
                },
            }
        },
    },
    "components": {
        "schemas": {
            "IntensityResponse": {
                "type": "object",
                "required": ["average_intensity", "message"],
                "properties": {
                    "average_intensity": {
                        "type": "number",
                        "format": "double",
                        "minimum": 0,
                        "maximum": 255,
                        "description": "The calculated average intensity value (0-255)",
                    },
                    "message": {
                        "type": "string",
                        "description": "Success message with formatted intensity value",
                    },
                },
            },
            "ErrorResponse": {
                "type": "object",
                "required": ["error"],
                "properties": {
                    "error": {"type": "string", "description": "Error description"},
                },
            },
        }
    },
}

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>API Documentation</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link rel="stylesheet" type="text/css" href="https://unpkg.com/swagger-ui-dist@5.9.0/swagger-ui.css" />
    <style>
        html { box-sizing: border-box; overflow-y: scroll; }
        *, *:before, *:after { box-sizing: inherit; }
        body { margin: 0; background: #fafafa; }
    </style>
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="https://unpkg.com/swagger-ui-dist@5.9.0/swagger-ui-bundle.js"></script>
    <script src="https://unpkg.com/swagger-ui-dist@5.9.0/swagger-ui-standalone-preset.js"></script>
    <script>
        window.onload = function() {
            window.ui = SwaggerUIBundle({
                url: "%(openapi_url)s",
                dom_id: "#swagger-ui",
                deepLinking: true,
                presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
                plugins: [SwaggerUIBundle.plugins.DownloadUrl],
                layout: "StandaloneLayout"
            });
        };
    </script>
</body>
</html>
""" % {"openapi_url": OPENAPI_URL}

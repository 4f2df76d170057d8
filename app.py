"""
Storefront
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the storefront package.
"""

from storefront import create_app
from storefront.config import Config, MongoConfig

# Create the Flask application using the factory
app = create_app(MongoConfig if Config.SESSION_TYPE == 'mongodb' else Config)

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=app.config['PORT'])

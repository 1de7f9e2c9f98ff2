"""Setup configuration for spice-storefront project."""

from setuptools import setup, find_packages

setup(
    name="spice-storefront",
    version="1.0.0",
    description="Spice storefront: Redis-backed shopping cart, product catalog and WhatsApp checkout",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["view_carts"],
    package_data={
        "services.cart_service": ["templates/*.html"],
        "services.catalog_service": ["templates/*.html"],
    },
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "redis>=5.0.0",
        "sqlalchemy>=2.0.23",
        "psycopg2-binary>=2.9.9",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "jinja2>=3.1.3",
        "markupsafe>=2.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.4",
            "httpx>=0.26.0",
        ],
    },
)

[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "comanda"
version = "0.1.0"
description = "Terminal order register for small restaurants: menu file, table orders, coupons and an end-of-day report"
requires-python = ">=3.10"
dependencies = []
keywords = ["restaurant", "orders", "menu", "point-of-sale", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Portuguese (Brazilian)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
comanda = "comanda.app:main"
comanda-create-menu = "comanda.create_menu:main"

[tool.hatch.build.targets.wheel]
packages = ["comanda"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

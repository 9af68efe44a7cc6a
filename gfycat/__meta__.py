__name__ = "gfycat"
__package__ = "gfycat-names"
__title__ = "Gfycat Names"
__version__ = "1.0.0"
__description__ = "Random adjective, adjective and animal name generator backed by locally cached word lists."
__source_repository__ = "https://github.com/umahmood/gfycat"
__license_type__ = "MIT License"
__license_classifier__ = "License :: OSI Approved :: MIT License"
__authors__ = [
    "Usman Mahmood",
]
__author__ = ", ".join(__authors__)
__emails__ = [
    ""
]
__keywords__ = [
    "gfycat",
    "names",
    "random",
    "generator",
    "adjective",
    "animal",
]

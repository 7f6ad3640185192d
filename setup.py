import setuptools

with open("osu_play/.version") as f:
    version = f.read().strip()

setuptools.setup(
    name="osu-play",
    version=version,
    python_requires=">=3.11.0",
    license="MIT",
    entry_points={"console_scripts": ["osu-play = osu_play.__main__:main"]},
    packages=["osu_play"],
    package_data={"osu_play": [".version", "py.typed"]},
    install_requires=[
        "appdirs",
        "click",
        "rapidfuzz",
    ],
    extras_require={
        "test": ["pytest"],
    },
)

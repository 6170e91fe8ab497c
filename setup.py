from setuptools import find_packages, setup

package_name = "sphere_paths"

setup(
    name="sphere-paths",
    version="0.1.0",
    packages=find_packages(exclude=["test", "test.*"]),
    data_files=[
        ("share/" + package_name + "/config", ["config/sphere_paths.yaml"]),
    ],
    python_requires=">=3.9",
    install_requires=["setuptools", "numpy", "scipy", "pydantic>=2", "pyyaml"],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=True,
    description="Great-arc geometry and boundary path assembly on the unit sphere",
    license="Apache-2.0",
)

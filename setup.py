from setuptools import setup, find_packages
from os import path, walk

package_name = 'gravity_cost'

scripts_list = []
for (root, _, files) in walk(path.join("demos")):
    for demo_file in files:
        if('yml' not in demo_file and '__pycache__' not in root):
            scripts_list.append(path.join(root, demo_file))

setup(
    name=package_name,
    version="1.0.0",
    package_dir={
        "": "python",
    },
    packages=find_packages(where="python"),
    scripts=scripts_list,
    install_requires=["setuptools",
                      "numpy",
                      "pin>=4.0.0,<4.1",
                      "crocoddyl==3.2.1",
                      "pyyaml"],
    extras_require={
        "test": ["pytest", "example-robot-data"],
        "demos": ["example-robot-data"],
    },
    zip_safe=True,
    maintainer="skleff",
    maintainer_email="sk8001@nyu.edu",
    long_description_content_type="text/markdown",
    description="Control regularization cost around the contact-consistent gravity compensation torque.",
    license="BSD-3-clause",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD-3-clause",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)

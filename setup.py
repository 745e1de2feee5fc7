from setuptools import setup, find_packages

setup(
    name="ontology-interpreter",
    version="0.1.0",
    packages=find_packages(include=["ontology_interpreter", "ontology_interpreter.*"]),
    package_data={
        "ontology_interpreter": ["config.yaml"],
    },
    install_requires=[
        # Ontology & Knowledge Graph
        "rdflib>=7.0.0",

        # API & Web
        "fastapi>=0.121.0",
        "uvicorn>=0.38.0",
        "pydantic>=2.12.0",

        # Utilities
        "python-dotenv>=1.2.0",
        "PyYAML>=6.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "httpx>=0.27.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ontology-interpret=ontology_interpreter.cli.interpret:main",
            "ontology-interpreter-server=ontology_interpreter.cli.run_server:main",
        ],
    },
    python_requires=">=3.11",
    description="Interpret RDF/OWL ontology files into typed instance graphs",
    author="OntoPlan Team",
    license="MIT",
)

#!/usr/bin/env python3
"""
Run Ontology Interpreter Server
Start FastAPI server for ontology interpretation
"""

import uvicorn


def main():
    """Run the FastAPI server."""
    # Import config inside main to avoid early module loading
    from ontology_interpreter.core.config import get_config

    # Load configuration
    config = get_config()
    server_config = config.get_server_config()
    data_config = config.get_data_config()

    host = server_config['host']
    port = server_config['port']

    # Print startup info
    print("=" * 60)
    print("Starting Ontology Interpreter Server")
    print("=" * 60)
    print()
    print(f"Data root: {data_config.get('root', 'data')}")
    print()
    print("API Documentation will be available at:")
    print(f"   http://localhost:{port}/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print("=" * 60)
    print()

    uvicorn.run(
        "ontology_interpreter.core.api:app",
        host=host,
        port=port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()

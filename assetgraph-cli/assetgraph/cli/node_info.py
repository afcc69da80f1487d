"""
Shows the info record reported by a DKG node.
"""

import argparse
import asyncio
import json
import logging
import os

from assetgraph.api import Api

default_endpoint = os.getenv("ASSETGRAPH_ENDPOINT", "http://localhost")
default_port = os.getenv("ASSETGRAPH_PORT", "8900")

async def show_info(endpoint, port, auth_token):

    api = Api.from_endpoint(endpoint, port=port)

    info = await api.node.info({"auth_token": auth_token})

    print(json.dumps(info, indent=4))

def main():

    parser = argparse.ArgumentParser(
        prog='ag-node-info',
        description=__doc__,
    )

    parser.add_argument(
        '-e', '--endpoint',
        default=default_endpoint,
        help=f'Node endpoint (default: {default_endpoint})',
    )

    parser.add_argument(
        '-p', '--port',
        default=default_port,
        help=f'Node port (default: {default_port})',
    )

    parser.add_argument(
        '-t', '--auth-token',
        default=os.getenv("ASSETGRAPH_AUTH_TOKEN"),
        help=f'Node auth token (default: $ASSETGRAPH_AUTH_TOKEN)',
    )

    parser.add_argument(
        '-l', '--log-level',
        default='WARNING',
        help=f'Log level (default: WARNING)',
    )

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    try:

        asyncio.run(show_info(args.endpoint, args.port, args.auth_token))

    except Exception as e:

        print("Exception:", e, flush=True)

if __name__ == "__main__":
    main()

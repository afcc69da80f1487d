"""
Runs a SPARQL query against a DKG node and prints the result.
"""

import argparse
import asyncio
import json
import logging
import os
import sys

from assetgraph.api import Api
from assetgraph.constants import QueryTypes, QUERY_TYPES
from assetgraph.constants import DEFAULT_MAX_NUMBER_OF_RETRIES
from assetgraph.constants import DEFAULT_FREQUENCY

default_endpoint = os.getenv("ASSETGRAPH_ENDPOINT", "http://localhost")
default_port = os.getenv("ASSETGRAPH_PORT", "8900")

async def run_query(
        endpoint, port, auth_token, query, query_type, retries, frequency,
):

    api = Api.from_endpoint(endpoint, port=port)

    result = await api.graph.query(
        query, query_type,
        {
            "auth_token": auth_token,
            "max_number_of_retries": retries,
            "frequency": frequency,
        },
    )

    print(json.dumps(result, indent=4))

    return result

def main():

    parser = argparse.ArgumentParser(
        prog='ag-query',
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
        '-T', '--type',
        default=QueryTypes.SELECT,
        choices=sorted(QUERY_TYPES),
        help=f'Query type (default: {QueryTypes.SELECT})',
    )

    parser.add_argument(
        '-r', '--retries',
        type=int,
        default=DEFAULT_MAX_NUMBER_OF_RETRIES,
        help=f'Status checks before giving up '
        f'(default: {DEFAULT_MAX_NUMBER_OF_RETRIES})',
    )

    parser.add_argument(
        '-f', '--frequency',
        type=float,
        default=DEFAULT_FREQUENCY,
        help=f'Seconds between status checks (default: {DEFAULT_FREQUENCY})',
    )

    parser.add_argument(
        '-l', '--log-level',
        default='WARNING',
        help=f'Log level (default: WARNING)',
    )

    parser.add_argument(
        'query', nargs='?',
        help=f'SPARQL query, read from stdin when omitted',
    )

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    query = args.query if args.query else sys.stdin.read()

    try:

        asyncio.run(run_query(
            args.endpoint, args.port, args.auth_token, query, args.type,
            args.retries, args.frequency,
        ))

    except Exception as e:

        print("Exception:", e, flush=True)

if __name__ == "__main__":
    main()

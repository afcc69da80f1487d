
# ---> asset create > [PRIVATE_ASSERTION_PREDICATE] > linking triple in the public graph
PRIVATE_ASSERTION_PREDICATE = "https://ontology.origintrail.io/dkg/1.0#privateAssertionID"

# Named graph a node stores each assertion under
ASSERTION_GRAPH_PREFIX = "assertion:"

UAL_PREFIX = "did:dkg:"

NQUADS_FORMAT = "application/n-quads"
CANONICALIZATION_ALGORITHM = "URDNA2015"


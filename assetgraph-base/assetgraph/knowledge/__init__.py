
from . assertion import build_assertion, format_assertion, calculate_root
from . assertion import get_assertion_size_in_bytes
from . assertion import get_assertion_triples_number
from . assertion import get_assertion_chunks_number
from . transcode import to_nquads, to_jsonld, to_output_format
from . transcode import find_private_assertion_id


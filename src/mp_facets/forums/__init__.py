"""Forums – discussion-topic search scope."""
from mp_facets.forums.scope import ENTITY_NAME, topic_candidate_tables, topic_scope

__all__ = ["ENTITY_NAME", "topic_candidate_tables", "topic_scope"]

"""Forums – topic search scope wiring.

Request tokens: ``q`` term (subject, post text, author name), ``i`` page,
``o`` sort, ``f`` forum ids, ``c`` customer ids, ``d`` creation date range
(``from~to``).
"""
from __future__ import annotations

from mp_facets.adapters.sqlalchemy.candidates import CandidateTable
from mp_facets.forums.models import Customer, Forum, ForumPost, ForumTopic
from mp_facets.search.facets import FacetDimension, FacetKind, FacetSorting
from mp_facets.search.handlers import (
    DateRangeHandler,
    IdInclusionHandler,
    MembershipTable,
    RelatedText,
    TermHandler,
)
from mp_facets.search.scope import SearchScope

ENTITY_NAME = "ForumTopic"

DIMENSIONS = (
    FacetDimension(FacetKind.FORUM, "f", "forumid", FacetSorting.HITS_DESC),
    FacetDimension(FacetKind.CUSTOMER, "c", "customerid", FacetSorting.HITS_DESC),
    FacetDimension(FacetKind.DATE, "d", "createdon", FacetSorting.DISPLAY_ORDER, is_range=True),
)

SORT_OPTIONS = {
    "subject": ForumTopic.subject.asc(),
    "created_on_desc": ForumTopic.created_on_utc.desc(),
    "created_on_asc": ForumTopic.created_on_utc.asc(),
    "last_post": ForumTopic.last_post_time.desc(),
    "posts": ForumTopic.num_posts.desc(),
}


def topic_scope() -> SearchScope:
    return SearchScope(
        name="forum",
        entity=ForumTopic,
        handlers=[
            IdInclusionHandler("f", ForumTopic.forum_id, kind=FacetKind.FORUM),
            IdInclusionHandler("c", ForumTopic.customer_id, kind=FacetKind.CUSTOMER),
            DateRangeHandler("d", ForumTopic.created_on_utc, kind=FacetKind.DATE),
            TermHandler(
                {
                    "subject": ForumTopic.subject,
                    "text": RelatedText(ForumPost, "text", "topic_id", ForumTopic.id),
                    "username": RelatedText(Customer, "username", "id", ForumTopic.customer_id),
                }
            ),
        ],
        dimensions=DIMENSIONS,
        sort_options=SORT_OPTIONS,
        default_sort="created_on_desc",
        default_fields=("subject", "text", "username"),
        base_criteria=(ForumTopic.published.is_(True),),
    )


def topic_candidate_tables() -> dict[FacetKind, CandidateTable]:
    return {
        FacetKind.FORUM: CandidateTable(
            Forum,
            membership=MembershipTable(ForumTopic, "id", "forum_id"),
            locale_key_group="Forum",
        ),
        FacetKind.CUSTOMER: CandidateTable(
            Customer,
            label="username",
            display_order=None,
            membership=MembershipTable(ForumTopic, "id", "customer_id"),
        ),
    }


__all__ = ["DIMENSIONS", "ENTITY_NAME", "SORT_OPTIONS", "topic_candidate_tables", "topic_scope"]

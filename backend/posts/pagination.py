from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.utils.urls import replace_query_param


class PostPagination(PageNumberPagination):
    """
    Fixed pages of 10 posts (``?page=N``), wrapped as::

        {"data": [...], "links": {...}, "meta": {...}}

    A page past the last one raises NotFound (404).
    """

    page_size = 10

    def _page_link(self, number):
        url = self.request.build_absolute_uri()
        return replace_query_param(url, self.page_query_param, number)

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response(
            {
                "data": data,
                "links": {
                    "first": self._page_link(1),
                    "last": self._page_link(paginator.num_pages),
                    "prev": self.get_previous_link(),
                    "next": self.get_next_link(),
                },
                "meta": {
                    "current_page": self.page.number,
                    "last_page": paginator.num_pages,
                    "per_page": self.page_size,
                    "total": paginator.count,
                },
            }
        )

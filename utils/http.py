"""
Request helpers shared by the API blueprints
"""
from flask import request, url_for


def request_payload():
    """Submitted fields from a JSON body or a (multipart) form"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def page_url_builder():
    """URL builder for other pages of the current listing, query string preserved"""
    args = request.args.to_dict()

    def page_url(page):
        return url_for(request.endpoint, **{**(request.view_args or {}), **args, 'page': page}, _external=True)

    return page_url

from fastapi import Request

from snippetbox.stores.protocols import SnippetStoreProtocol, UserStoreProtocol


# The app factory puts an AppContext on app.state; routes only ever see the protocols.

def get_snippet_store(request: Request) -> SnippetStoreProtocol:
    return request.app.state.context.snippets


def get_user_store(request: Request) -> UserStoreProtocol:
    return request.app.state.context.users

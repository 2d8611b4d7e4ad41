"""Media fetches go through the same block and visibility checks as the post that owns them."""

from social.errors import NotFound
from social.services.gate import InteractionGate
from social.transactions import run_in_transaction


class MediaService:
    def __init__(self, viewer):
        self.viewer = viewer

    def access(self, post_id, asset_id):
        """Return the storage path for one media asset; anonymous viewers see public posts only."""
        return run_in_transaction(self._access, post_id, asset_id)

    def _access(self, post_id, asset_id):
        post = InteractionGate(self.viewer).check_content(post_id)
        item = post.media_asset(asset_id)
        if item is None:
            raise NotFound("MEDIA_NOT_FOUND")
        return item["path"]

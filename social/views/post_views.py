from social.serializers import (
    AccessMediaSchema,
    CreateCommentSchema,
    CreatePostSchema,
    DeleteCommentSchema,
    PostRefSchema,
    PostSerializer,
    ToggleLikeSchema,
    UpdatePostSchema,
    UserPostsSchema,
)
from social.services.comments import CommentService
from social.services.identity import get_user_by_uid
from social.services.likes import LikeService
from social.services.media import MediaService
from social.services.posts import PostService
from social.views.rpc import procedure


@procedure("createPost", CreatePostSchema, rate_limited=True)
def create_post(request, data):
    post = PostService(request.user).create_post(
        caption=data["caption"],
        visibility=data["visibility"],
        tags=data.get("tags"),
        media=[dict(item) for item in data.get("media", [])],
    )
    return {"postId": str(post.pk)}


@procedure("updatePost", UpdatePostSchema)
def update_post(request, data):
    changes = {key: data[key] for key in ("caption", "tags", "visibility") if key in data}
    PostService(request.user).update_post(data["postId"], **changes)


@procedure("deletePost", PostRefSchema)
def delete_post(request, data):
    PostService(request.user).delete_post(data["postId"])


@procedure("getPost", PostRefSchema, public=True)
def get_post(request, data):
    """Read a single post; anonymous callers only see public posts."""
    return PostSerializer(PostService(request.user).get_post(data["postId"])).data


@procedure("listUserPosts", UserPostsSchema, public=True)
def list_user_posts(request, data):
    author = get_user_by_uid(data["uid"])
    posts = PostService(request.user).list_user_posts(author, limit=data["limit"])
    return {"posts": PostSerializer(posts, many=True).data}


@procedure("createComment", CreateCommentSchema, rate_limited=True)
def create_comment(request, data):
    comment = CommentService(request.user).create_comment(
        data["postId"], data["body"], data.get("parentCommentId")
    )
    return {"commentId": str(comment.pk)}


@procedure("deleteComment", DeleteCommentSchema)
def delete_comment(request, data):
    CommentService(request.user).delete_comment(data["postId"], data["commentId"])


@procedure("toggleLike", ToggleLikeSchema, rate_limited=True)
def toggle_like(request, data):
    return {"likeCount": LikeService(request.user).toggle_like(data["postId"], data["like"])}


@procedure("accessMedia", AccessMediaSchema, public=True)
def access_media(request, data):
    return {"path": MediaService(request.user).access(data["postId"], data["assetId"])}

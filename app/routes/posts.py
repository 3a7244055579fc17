from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.utils.validators import (
    AUTHOR_ID_MAX_LENGTH,
    POST_TYPE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    validate_author_id,
    validate_post_type,
    validate_required_fields,
    validate_title,
)

# external name -> column
POST_FIELDS = {
    'Type': 'type',
    'Body': 'body',
    'Title': 'title',
    'AuthorID': 'author_id',
}


def create_posts_blueprint(
    *,
    post_repo,
    api_key_or_login_required,
    permission_required,
    sanitize_string,
    logger,
):
    """Create post routes with injected dependencies."""
    blueprint = Blueprint('posts', __name__)

    def clean_value(key, value):
        """Normalize one incoming post field. Returns ``(value, error)``."""
        if value is None:
            return None, None
        if not isinstance(value, str):
            return None, f'{key} must be a string'
        if key == 'Title':
            value = sanitize_string(value, max_length=TITLE_MAX_LENGTH + 1)
            valid, error = validate_title(value)
            return value, (None if valid else error)
        if key == 'Type':
            value = sanitize_string(value, max_length=POST_TYPE_MAX_LENGTH + 1)
            valid, error = validate_post_type(value)
            return value, (None if valid else error)
        if key == 'AuthorID':
            value = sanitize_string(value, max_length=AUTHOR_ID_MAX_LENGTH + 1)
            valid, error = validate_author_id(value)
            return value, (None if valid else error)
        return value, None

    @blueprint.route('/posts', methods=['GET'])
    def list_posts():
        """List live posts, newest first."""
        try:
            posts = post_repo.list_all(
                post_type=request.args.get('type') or None,
                author_id=request.args.get('author') or None,
            )
            return jsonify([post.to_public_dict() for post in posts])
        except Exception as e:
            logger.error(f"Error fetching posts: {e}")
            return jsonify({'error': 'Failed to fetch posts'}), 500

    @blueprint.route('/posts/trash', methods=['GET'])
    @api_key_or_login_required
    @permission_required('ViewPosts')
    def list_deleted_posts():
        """List soft-deleted posts."""
        posts = post_repo.list_all(include_deleted=True)
        return jsonify([post.to_public_dict() for post in posts if post.is_deleted])

    @blueprint.route('/posts/<post_id>', methods=['GET'])
    def get_post(post_id):
        post = post_repo.get_by_id(post_id)
        if post is None:
            return jsonify({'error': 'Post not found'}), 404
        return jsonify(post.to_public_dict())

    @blueprint.route('/posts', methods=['POST'])
    @api_key_or_login_required
    @permission_required('EditPosts')
    def create_post():
        """Create a post; AuthorID defaults to the caller."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        valid, error = validate_required_fields(data, ['Title'])
        if not valid:
            return jsonify({'error': error}), 400

        values = {}
        for key, column in POST_FIELDS.items():
            value, error = clean_value(key, data.get(key))
            if error:
                return jsonify({'error': error}), 400
            values[column] = value

        if not values['title']:
            return jsonify({'error': 'Missing required field: Title'}), 400

        try:
            post = post_repo.create(
                title=values['title'],
                body=values['body'],
                post_type=values['type'],
                author_id=values['author_id'] or request.auth_user.id,
            )
            logger.info(f"Post {post.id} created by {request.auth_user.email}")
            return jsonify(post.to_public_dict()), 201
        except Exception as e:
            logger.error(f"Failed to create post: {e}")
            return jsonify({'error': 'Failed to create post'}), 500

    @blueprint.route('/posts/<post_id>', methods=['PUT', 'PATCH'])
    @api_key_or_login_required
    @permission_required('EditPosts')
    def update_post(post_id):
        """Update the supplied fields. A field sent as null is cleared."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        changes = {}
        for key, column in POST_FIELDS.items():
            if key not in data:
                continue
            value, error = clean_value(key, data[key])
            if error:
                return jsonify({'error': error}), 400
            changes[column] = value

        if not changes:
            return jsonify({'error': f"No updatable fields supplied. Use: {', '.join(POST_FIELDS)}"}), 400

        try:
            if not post_repo.update(post_id, changes):
                return jsonify({'error': 'Post not found'}), 404
            logger.info(f"Post {post_id} updated by {request.auth_user.email}")
            return jsonify(post_repo.get_by_id(post_id).to_public_dict())
        except Exception as e:
            logger.error(f"Failed to update post {post_id}: {e}")
            return jsonify({'error': 'Failed to update post'}), 500

    @blueprint.route('/posts/<post_id>', methods=['DELETE'])
    @api_key_or_login_required
    @permission_required('EditPosts')
    def delete_post(post_id):
        """Soft-delete a post."""
        if not post_repo.soft_delete(post_id):
            return jsonify({'error': 'Post not found'}), 404
        logger.info(f"Post {post_id} deleted by {request.auth_user.email}")
        return jsonify({'success': True})

    @blueprint.route('/posts/<post_id>/restore', methods=['POST'])
    @api_key_or_login_required
    @permission_required('EditPosts')
    def restore_post(post_id):
        if not post_repo.restore(post_id):
            return jsonify({'error': 'Deleted post not found'}), 404
        logger.info(f"Post {post_id} restored by {request.auth_user.email}")
        return jsonify(post_repo.get_by_id(post_id).to_public_dict())

    return blueprint

from . import main
from flask import flash, redirect, render_template, url_for
from ..errors import SAVE_FAILED, StoreUnavailable
from ..forms import ConfirmForm, PostForm
from ..gate import current_principal, principal_required
from ..posts import create_post, delete_post, get_owned_post, get_post, list_posts, posts_for_owner, update_post


@main.route('/blogs', methods=['GET'])
def blogs():
    return render_template('blogs/list.html', posts=list_posts(), heading="All posts")


@main.route('/blogs/<int:post_id>')
def show_blog(post_id):
    post = get_post(post_id)
    principal = current_principal()
    can_edit = principal is not None and principal.owns(post)
    return render_template('blogs/show.html', post=post, can_edit=can_edit, delete_form=ConfirmForm())


@main.route('/my-posts')
@principal_required
def my_posts(principal):
    posts = posts_for_owner(principal.user_id)
    return render_template('blogs/list.html', posts=posts, heading="My posts", delete_form=ConfirmForm())


@main.route('/blogs/new')
@principal_required
def new_blog(principal):
    return render_template('blogs/form.html', form=PostForm(), action=url_for('main.create_blog'), heading="New post")


@main.route('/blogs', methods=['POST'])
@principal_required
def create_blog(principal):
    form = PostForm()
    if not form.validate_on_submit():
        return render_template('blogs/form.html', form=form, action=url_for('main.create_blog'), heading="New post"), 400

    try:
        create_post(principal.user_id, form.title.data, form.content.data)
    except StoreUnavailable:
        flash(SAVE_FAILED, "error")
        return redirect(url_for('main.new_blog'))

    flash("Post created.", "success")
    return redirect(url_for('main.blogs'))


@main.route('/blogs/<int:post_id>/edit', methods=['GET', 'POST'])
@principal_required
def edit_blog(principal, post_id):
    post = get_owned_post(post_id, principal.user_id)
    form = PostForm(obj=post)
    action = url_for('main.edit_blog', post_id=post_id)

    if form.validate_on_submit():
        try:
            update_post(post_id, principal.user_id, form.title.data, form.content.data)
        except StoreUnavailable:
            flash(SAVE_FAILED, "error")
            return redirect(action)
        flash("Post updated.", "success")
        return redirect(url_for('main.show_blog', post_id=post_id))

    status = 400 if form.is_submitted() else 200
    return render_template('blogs/form.html', form=form, action=action, heading="Edit post", post=post), status


@main.route('/blogs/<int:post_id>/delete', methods=['POST'])
@principal_required
def delete_blog(principal, post_id):
    try:
        deleted = delete_post(post_id, principal.user_id)
    except StoreUnavailable:
        flash(SAVE_FAILED, "error")
        return redirect(url_for('main.my_posts'))

    if deleted:
        flash("Post deleted.", "success")
    return redirect(url_for('main.my_posts'))

"""Landing page: sign-in card for the workspace."""

from markupsafe import Markup

from bizdesk.pages._layout import ID_TOKEN_COOKIE, render_page
from bizdesk.ui import card, card_content, card_header, card_title, text_input

# Signs in against the JSON API and keeps the ID token in a cookie that the
# workspace pages read.
_SIGN_IN_SCRIPT = Markup(
    """
(function () {
    var form = document.getElementById("sign-in");
    var status = document.getElementById("sign-in-status");
    form.addEventListener("submit", function (ev) {
        ev.preventDefault();
        var action = ev.submitter && ev.submitter.value === "signup" ? "signup" : "login";
        status.textContent = "";
        fetch("/api/v1/auth/" + action, {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ email: form.email.value, password: form.password.value })
        }).then(function (resp) {
            return resp.json().then(function (data) { return { ok: resp.ok, data: data }; });
        }).then(function (r) {
            if (!r.ok) {
                status.textContent = r.data.message || "Sign in failed";
                return;
            }
            document.cookie = "%s=" + encodeURIComponent(r.data.id_token) +
                "; Max-Age=" + r.data.expires_in + "; Path=/; SameSite=Strict";
            window.location.href = "/workspace/clients";
        });
    });
    document.getElementById("reset").addEventListener("click", function () {
        fetch("/api/v1/auth/password-reset", {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ email: form.email.value })
        }).then(function () {
            status.textContent = "If that account exists, a reset email is on its way.";
        });
    });
})();
"""
    % ID_TOKEN_COOKIE
)

_BUTTON = "px-4 py-2 rounded-lg text-sm font-medium"


def render_root_page(app_name: str, error: str | None = None) -> str:
    """Return HTML for the landing page. error is shown under the password field."""
    fields = Markup("").join(
        [
            text_input(
                label="Email",
                id="email",
                name="email",
                type_="email",
                autocomplete="email",
                required=True,
            ),
            text_input(
                label="Password",
                error=error,
                id="password",
                name="password",
                type_="password",
                autocomplete="current-password",
                minlength=6,
                required=True,
            ),
        ]
    )
    buttons = Markup(
        '<div class="flex items-center gap-3">'
        f'<button type="submit" value="login" class="{_BUTTON} bg-foreground text-white">Sign in</button>'
        f'<button type="submit" value="signup" class="{_BUTTON} border border-zinc-300">Create account</button>'
        '<button type="button" id="reset" class="ml-auto text-sm text-zinc-500 hover:underline">'
        "Forgot password?</button></div>"
        '<p id="sign-in-status" class="text-sm text-red-500" role="status"></p>'
    )
    form = Markup('<form id="sign-in" class="space-y-4">') + fields + buttons + Markup("</form>")
    body = Markup('<div class="max-w-md mx-auto">') + card(
        card_header(card_title(app_name)) + card_content(form)
    ) + Markup("</div>")
    return render_page(app_name, "Sign in", body, script=_SIGN_IN_SCRIPT)

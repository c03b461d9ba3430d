# src/auditor/catalog.py
from typing import Dict, NamedTuple, Optional

from .model import Finding, Severity

ERROR = Severity.ERROR
WARNING = Severity.WARNING
INFO = Severity.INFO


class RuleSpec(NamedTuple):
    severity: Severity
    message: str
    fix: Optional[str] = None
    rationale: Optional[str] = None


# Message and fix templates are formatted with the keyword details passed to make_finding().
RULES: Dict[str, RuleSpec] = {
    # --- Structure ---
    "structural-duplicate-id": RuleSpec(
        ERROR, 'Duplicate id "{id}" found {count} times',
        "Ensure ids are unique", "Duplicate ids can cause DOM collisions."),
    "broken-link": RuleSpec(
        WARNING, "<a> tag has broken or empty href",
        "Provide a valid href value", "Broken links harm UX and SEO."),
    "broken-img-src": RuleSpec(
        WARNING, "<img> tag has empty src",
        "Provide a valid image src", "Images without a source render as broken placeholders."),
    "structural-invalid-nesting-div-in-p": RuleSpec(
        ERROR, "Invalid nesting: <div> inside <p>",
        "Remove div from paragraph or use span", "Block elements cannot be nested inside paragraphs."),
    "structural-invalid-nesting-button-in-a": RuleSpec(
        ERROR, "Invalid nesting: <button> inside <a>",
        "Remove button or use CSS styling on anchor", "Interactive elements should not be nested."),
    "structural-invalid-nesting-a-in-a": RuleSpec(
        ERROR, "Invalid nesting: <a> inside <a>",
        "Remove nested anchor", "Anchor tags cannot be nested."),
    "structural-invalid-nesting-button-in-button": RuleSpec(
        ERROR, "Invalid nesting: <button> inside <button>",
        "Remove nested button", "Button tags cannot be nested."),
    "structural-li-outside-list": RuleSpec(
        ERROR, "<li> tag found outside of <ul> or <ol>",
        "Wrap <li> in <ul> or <ol>", "List items must be inside list containers."),
    "structural-cell-outside-row": RuleSpec(
        ERROR, "Table cell found outside of <tr>",
        "Wrap cells in <tr>", "Table cells must be inside table rows."),
    "structural-excessive-depth": RuleSpec(
        WARNING, "DOM depth is {depth}, which may impact performance",
        "Reduce nesting depth", "Deep trees slow down layout and style recalculation."),
    "structural-unclosed-tags": RuleSpec(
        WARNING, "Possible unclosed tags detected ({opened} opened, {closed} closed)",
        "Ensure all tags are properly closed", "Unclosed tags can break layout."),
    "design-color-literal": RuleSpec(
        INFO, "Direct color {color} used",
        "Prefer design tokens (var(--...))", "Use CSS variables for design consistency."),
    "design-tokens-missing": RuleSpec(
        WARNING, "Styles do not use design tokens (CSS variables)",
        "Replace hard-coded values with design tokens", "Keeps styles consistent with the design system."),

    # --- Accessibility ---
    "img-alt-missing": RuleSpec(
        ERROR, "Image tag is missing alt text (WCAG 2.2 AA): {src}",
        "Add alt attribute", "Provide descriptive alt text for accessibility."),
    "img-alt-empty": RuleSpec(
        WARNING, "Image has empty alt text (WCAG 2.2 AA): {src}",
        'Add descriptive alt text or use alt="" only for decorative images',
        "Meaningful images require descriptive alt text."),
    "lang-missing": RuleSpec(
        ERROR, "Missing lang attribute on <html> (WCAG 2.2 AA)",
        'Add lang="en" or appropriate language code', "Improves accessibility for screen readers."),
    "lang-invalid": RuleSpec(
        WARNING, 'Invalid lang code: "{lang}"',
        'Use valid ISO 639-1 language code (e.g., "en", "es", "en-US")',
        "Valid lang codes are required for assistive technology."),
    "form-label-missing": RuleSpec(
        ERROR, "Form input missing associated label (WCAG 2.2 AA)",
        "Add <label> with for attribute or aria-label", "Form inputs must be labeled for accessibility."),
    "button-label-missing": RuleSpec(
        ERROR, "Button has no text or aria-label (WCAG 2.2 AA)",
        "Add button text or aria-label", "Buttons must have accessible names."),
    "contrast-low": RuleSpec(
        ERROR, "Low color contrast: {color} on {background} ({ratio:.2f}:1)",
        "Use higher contrast colors (min {minimum}:1 for normal text)", "Meets WCAG AA contrast ratio."),
    "keyboard-trap": RuleSpec(
        WARNING, "Possible keyboard trap (tabindex=-1) - WCAG 2.2 AA",
        "Avoid tabindex=-1 on interactive elements", "Prevents keyboard traps."),
    "role-missing": RuleSpec(
        WARNING, "Interactive div missing role attribute (WCAG 2.2 AA)",
        'Add role="button" or use <button> element', "Interactive elements need proper roles."),
    "a11y-rtl-dir-missing": RuleSpec(
        WARNING, 'RTL language "{lang}" detected but missing dir="rtl" attribute',
        'Add dir="rtl" to <html>', "Right-to-left languages require dir=\"rtl\"."),

    # --- SEO ---
    "seo-missing-title": RuleSpec(
        WARNING, "Missing <title> tag", "Add <title>Page Title</title>", "Improves SEO."),
    "seo-missing-description": RuleSpec(
        WARNING, "Missing meta description",
        'Add <meta name="description" content="...">', "Improves SEO."),
    "seo-missing-viewport": RuleSpec(
        WARNING, "Missing viewport meta tag",
        'Add <meta name="viewport" content="width=device-width, initial-scale=1">',
        "Essential for mobile SEO."),
    "seo-missing-canonical": RuleSpec(
        INFO, "Missing canonical link",
        'Add <link rel="canonical" href="...">', "Prevents duplicate content issues."),
    "seo-missing-og-title": RuleSpec(
        INFO, "Missing Open Graph title (og:title)",
        "Add Open Graph meta tags for social media", "Improves social media sharing."),
    "seo-missing-jsonld": RuleSpec(
        INFO, "Missing JSON-LD schema", "Add JSON-LD structured data", "Improves SEO."),
    "seo-missing-heading": RuleSpec(
        WARNING, "No heading (h1-h3) found",
        "Add at least one heading (h1-h3)", "Improves SEO and structure."),
    "seo-non-semantic": RuleSpec(
        INFO, "Non-semantic tag used for main content",
        'Use <main> tag instead of <div role="main">', "Improves semantic structure."),

    # --- Security ---
    "security-target-blank-rel": RuleSpec(
        ERROR, 'Anchor opens in new tab without rel="noopener noreferrer"',
        'Add rel="noopener noreferrer"', "Prevent reverse tabnabbing and improve security."),
    "security-target-blank-noopener": RuleSpec(
        WARNING, 'Link with target="_blank" missing rel="noopener"',
        "Add noopener to rel attribute", "Prevents reverse tabnabbing attacks."),
    "security-inline-script": RuleSpec(
        ERROR, "Inline <script> tag detected",
        "Move script to external file", "Inline scripts are a security risk and violate CSP."),
    "security-missing-csp": RuleSpec(
        WARNING, "Missing Content-Security-Policy meta tag",
        "Add CSP meta tag to prevent XSS", "CSP helps prevent XSS."),
    "security-xss-eval": RuleSpec(
        ERROR, "Potential XSS vector: eval() usage",
        "Avoid eval()", "eval() can execute arbitrary code."),
    "security-xss-function-constructor": RuleSpec(
        ERROR, "Potential XSS vector: Function constructor",
        "Avoid Function constructor", "Can execute arbitrary code."),
    "security-xss-dangerous-html": RuleSpec(
        ERROR, "Potential XSS vector: dangerouslySetInnerHTML",
        "Avoid dangerouslySetInnerHTML or sanitize input", "Can introduce XSS vulnerabilities."),
    "security-inline-event-handler": RuleSpec(
        WARNING, "Inline event handler detected (e.g., onclick)",
        "Use addEventListener instead", "Inline event handlers violate CSP and are less maintainable."),
    "security-http-link": RuleSpec(
        WARNING, "Insecure HTTP link found: {url}",
        "Use HTTPS instead of HTTP", "HTTP is insecure and can be intercepted."),
    "security-http-resource": RuleSpec(
        WARNING, "Insecure HTTP resource found: {url}",
        "Use HTTPS for all resources", "HTTP is insecure and can be intercepted."),

    # --- Performance ---
    "perf-missing-lazy-loading": RuleSpec(
        INFO, "Image missing lazy loading attribute",
        'Add loading="lazy" to images below the fold', "Improves initial page load performance."),
    "perf-missing-image-dimensions": RuleSpec(
        INFO, "Image missing width or height attributes",
        "Add width and height to prevent layout shift", "Prevents cumulative layout shift (CLS)."),
    "perf-large-image": RuleSpec(
        INFO, 'Image src "{src}" may be large or unoptimized',
        "Optimize or compress image", "Large images impact performance."),
    "perf-blocking-script": RuleSpec(
        WARNING, "Blocking script in <head> without async/defer",
        "Add async or defer attribute to scripts", "Blocking scripts delay page rendering."),
    "perf-unused-css": RuleSpec(
        INFO, 'Unused CSS class ".{name}"', "Remove unused CSS", "Removes dead code."),
    "perf-multiple-fonts": RuleSpec(
        INFO, "Multiple font families detected ({count}, may impact performance)",
        "Limit font families", "Each font family requires additional downloads."),

    # --- Localization ---
    "i18n-untranslated": RuleSpec(
        INFO, 'Literal text "{text}" may be missing localization',
        "Wrap text with t('key')", "Use the translation system for user-facing text."),
    "i18n-hardcoded-date": RuleSpec(
        INFO, "Hardcoded date format detected",
        "Use Intl.DateTimeFormat for dates", "Date formats vary by locale."),
    "i18n-missing-hreflang": RuleSpec(
        INFO, "Link to alternate language missing hreflang attribute",
        "Add hreflang attribute for language variants",
        "Helps search engines understand language variants."),
}


def make_finding(rule: str, **details) -> Finding:
    """Builds a Finding from the catalog entry of `rule`, formatting its templates with `details`."""
    spec = RULES[rule]
    return Finding(
        rule=rule,
        severity=spec.severity,
        message=spec.message.format(**details),
        fix=spec.fix.format(**details) if spec.fix else None,
        rationale=spec.rationale,
    )

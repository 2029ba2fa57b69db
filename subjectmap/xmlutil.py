"""
Допоміжні функції для побудови XML конфігурації (тільки для внутрішнього використання).
"""
import re

PROLOG = '<?xml version="1.0"?>'

# Амперсанд, який ще не є частиною відомої сутності
_BARE_AMP = re.compile(r"&(?!(?:amp|apos|lt|gt);)")


def esc(value):
    if value is None:
        return ""
    value = str(value).replace("<", "&lt;").replace(">", "&gt;")
    return _BARE_AMP.sub("&amp;", value)


def start_tag(name, **attrs):
    xml = f"<{name}"
    for key, val in attrs.items():
        xml += f' {key}="{esc(val)}"'
    return xml + ">"


def end_tag(name):
    return f"</{name}>"


def element(name, content, **attrs):
    return start_tag(name, **attrs) + esc(content) + end_tag(name)

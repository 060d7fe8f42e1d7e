"""Re-indent a small XML document — zero config, zero deps."""

from tagline import format_string

source = """<?xml version="1.0"?>
<order id="42"><customer>Ada &amp; Co</customer>
<items><item sku="a1"></item><item sku="b2"/></items>
<notes>   </notes></order>"""

print(format_string(source), end="")

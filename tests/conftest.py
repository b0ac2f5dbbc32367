"""
Shared fixtures: a small Korean/Chinese episode in both document layouts.
"""

import pytest

KR_DOC = """<tt ttp:tickRate="10000000"><body><div>
<p xml:id="subtitle1" begin="10000000t" end="30000000t" region="region1" style="style1">하나</p>
<p xml:id="subtitle2" begin="100000000t" end="120000000t" region="region1" style="style1">둘<br/>셋</p>
</div></body></tt>
"""

# tickRate 2.7MHz: 0.2s and 20s
CH_DOC = """<tt ttp:tickRate="2700000"><body><div>
<p xml:id="subtitle1" begin="540000t" end="8100000t" region="region1"><span>一</span></p>
<p xml:id="subtitle2" begin="54000000t" end="59400000t" region="region1"><span>二</span></p>
</div></body></tt>
"""


@pytest.fixture
def kr_doc():
    return KR_DOC


@pytest.fixture
def ch_doc():
    return CH_DOC


@pytest.fixture
def workdir(tmp_path):
    (tmp_path / "ep1-kr.xml").write_text(KR_DOC, encoding="utf-8")
    (tmp_path / "ep1-ch.xml").write_text(CH_DOC, encoding="utf-8")
    return tmp_path

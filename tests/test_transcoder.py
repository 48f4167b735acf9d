"""
Unit tests for the HTML to Markdown transcoding pipeline
"""
import pytest
from unittest.mock import Mock

from generators.markdown.transcoder import (
    MarkdownTranscoder,
    RichTextConverter,
    normalize_code_fences,
    fold_nbsp,
    transcode,
)


class TestMarkdownTranscoder:
    """End-to-end pipeline against markdownify"""

    @pytest.fixture
    def transcoder(self):
        return MarkdownTranscoder()

    def test_basic_conversion(self, transcoder):
        """Test plain HTML is converted by markdownify"""
        result = transcoder.transcode('<h2>Title</h2><p>Some <strong>bold</strong> text</p>')

        assert '## Title' in result
        assert 'Some **bold** text' in result

    def test_empty_input(self, transcoder):
        assert transcoder.transcode('') == ''
        assert transcoder.transcode(None) == ''

    def test_blockquote_line_breaks(self, transcoder):
        """Test <br> inside a blockquote yields one quoted line per segment"""
        result = transcoder.transcode('<blockquote>Line one<br>Line two<br>Line three</blockquote>')

        assert result == '> Line one\n> Line two\n> Line three'

    def test_entities_inside_pre_are_kept(self, transcoder):
        """Test &lt;div&gt; survives inside a preformatted block"""
        result = transcoder.transcode('<pre>&lt;div&gt;</pre>')

        assert '```' in result
        assert '&lt;div&gt;' in result
        assert '<div>' not in result

    @pytest.mark.parametrize('code', [
        '&lt;div&gt;',
        'print(&quot;hi&quot;)',
        'it&#39;s',
        'a&nbsp;&nbsp;b',
        'x = &#123;&#125;',
        'a > b',
        'echo &amp;amp;',
    ])
    def test_preformatted_text_is_byte_identical(self, transcoder, code):
        """Test entities and literal characters inside <pre> reach the fence unchanged"""
        result = transcoder.transcode(f'<pre>{code}</pre>')

        assert result == f'```\n{code}\n```'

    def test_pre_inside_shielded_list_restored(self, transcoder):
        """Test a <pre> kept as raw HTML inside an ordered list is restored as written"""
        ol = '<ol><li><pre>&quot;x&quot; &lt; y</pre></li></ol>'

        assert transcoder.transcode(ol) == ol

    def test_code_block_language(self, transcoder):
        """Test the fence carries the language-xxx class"""
        html = '<pre><code class="language-js">if (a &amp;&amp; b) {}</code></pre>'

        result = transcoder.transcode(html)

        assert result.startswith('```js\n')
        assert 'if (a &amp;&amp; b) {}' in result

    def test_entities_in_prose_are_restored(self, transcoder):
        """Test prose entities come back in their original form"""
        result = transcoder.transcode('<p>Tom &amp; Jerry &copy; 2024</p>')

        assert result == 'Tom &amp; Jerry &copy; 2024'

    def test_iframe_preserved(self, transcoder):
        """Test embeds appear byte-identical in the output"""
        iframe = '<iframe src="https://example.com/x"></iframe>'

        result = transcoder.transcode(f'<p>Intro</p>{iframe}<p>Outro</p>')

        assert iframe in result
        assert 'Intro' in result and 'Outro' in result

    def test_iframe_with_entity_in_attribute(self, transcoder):
        iframe = '<iframe src="https://www.youtube.com/embed/x?a=1&amp;b=2" width="560" allowfullscreen></iframe>'

        assert iframe in transcoder.transcode(iframe)

    def test_ordered_list_preserved_as_html(self, transcoder):
        ol = '<ol start="2"><li>One</li><li>Two</li></ol>'

        result = transcoder.transcode(f'<p>Steps</p>{ol}')

        assert ol in result

    def test_span_preserved_inline(self, transcoder):
        result = transcoder.transcode('<p>Hello <span style="color:red">red</span> world</p>')

        assert result == 'Hello <span style="color:red">red</span> world'

    def test_nbsp_folded(self, transcoder):
        result = transcoder.transcode('<p>a\u00a0b</p>')

        assert result == 'a b'

    def test_underscores_not_escaped(self, transcoder):
        result = transcoder.transcode('<p>snake_case_name</p>')

        assert result == 'snake_case_name'

    def test_idempotent(self, transcoder):
        """Test repeated calls give the same result"""
        html = (
            '<p>A &amp; B</p><iframe src="x"></iframe>'
            '<blockquote>q1<br>q2</blockquote><ol><li>i</li></ol>'
        )

        first = transcoder.transcode(html)
        second = transcoder.transcode(html)

        assert first == second
        assert MarkdownTranscoder().transcode(html) == first

    def test_module_level_transcode(self):
        assert transcode('<p>hi</p>') == 'hi'


class TestPipelineOrdering:
    """Pipeline behaviour observed through an injected converter"""

    def test_identity_converter_round_trip(self):
        """Test restore(extract(x)) reproduces x through the whole stack"""
        html = (
            '<p>a &amp; b</p>'
            '<iframe src="https://example.com/x?a=1&amp;b=2"></iframe>'
            '<ol><li><span>x</span> &gt; y</li></ol>'
            '<p><span class="hl">z&nbsp;</span></p>'
            '<pre>&lt;div&gt;</pre>'
        )

        transcoder = MarkdownTranscoder(converter=lambda text: text)

        assert transcoder.transcode(html) == html

    def test_converter_sees_masked_html(self):
        """Test the converter never receives shielded markup"""
        converter = Mock(side_effect=lambda text: text)
        transcoder = MarkdownTranscoder(converter=converter)

        transcoder.transcode(
            '<p>&amp;</p><iframe src="x"></iframe><ol><li>1</li></ol>'
            '<span>s</span><pre>&lt;b&gt;</pre><blockquote>a<br>b</blockquote>'
        )

        seen = converter.call_args[0][0]
        assert '<iframe' not in seen
        assert '<ol' not in seen
        assert '<span' not in seen
        assert '<p>__ENTITY_PLACEHOLDER_0__</p>' in seen
        assert '<pre>&amp;lt;b&amp;gt;</pre>' in seen
        assert '<br>' not in seen
        assert '__BLOCKQUOTE_LINE_BREAK__' in seen

    def test_code_fence_quirk_normalized(self):
        """Test a converter emitting a bracketed language line is fixed up"""
        transcoder = MarkdownTranscoder(converter=lambda text: '```\n[js]\nconsole.log(1)\n```\n')

        assert transcoder.transcode('<pre>ignored</pre>') == '```js\nconsole.log(1)\n```'

    def test_unmatched_placeholder_left_literal(self):
        """Test a token the converter invented is not an error"""
        transcoder = MarkdownTranscoder(converter=lambda text: text + ' __SPAN_PLACEHOLDER_9__')

        result = transcoder.transcode('<span>a</span>')

        assert result == '<span>a</span> __SPAN_PLACEHOLDER_9__'


class TestPostProcessing:
    """Test code fence and nbsp helpers"""

    def test_normalize_code_fences(self):
        assert normalize_code_fences('```\n[js]\ncode\n```') == '```js\ncode\n```'

    def test_normalize_code_fences_with_trailing_spaces(self):
        assert normalize_code_fences('```  \n[python]\nx = 1\n```') == '```python\nx = 1\n```'

    def test_normalize_code_fences_language_with_bracket(self):
        assert normalize_code_fences('```\n[a]b]\ncode\n```') == '```a]b\ncode\n```'

    def test_fence_with_language_untouched(self):
        markdown = '```ts\n[not-a-lang]\n```'

        assert normalize_code_fences(markdown) == markdown

    def test_fold_nbsp(self):
        assert fold_nbsp('a\u00a0b\u00a0\u00a0c') == 'a b  c'


class TestRichTextConverter:
    """Test converter configuration"""

    def test_default_options(self):
        converter = RichTextConverter()

        assert converter.options['heading_style'] == 'ATX'
        assert converter.options['escape_underscores'] is False

    def test_options_override(self):
        converter = RichTextConverter(bullets='*')

        assert converter.options['bullets'] == '*'

    def test_pre_language_from_pre_class(self):
        result = RichTextConverter().convert('<pre class="lang-python">x = 1</pre>')

        assert '```python' in result

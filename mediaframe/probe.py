"""
Client side media probe injected at the end of every rewritten page.

In the browser it collects .mp4 sources from <video> elements and links and
posts them to the embedding frame as

    {type: 'foundMedia', items: [{url: ..., title: ...}, ...]}

with target origin '*'. It scans on load, again after 1.5s, and on every DOM
mutation under <body>.
"""

MESSAGE_TYPE = 'foundMedia'
RESCAN_DELAY_MS = 1500

PROBE_SCRIPT = r"""
(function(){
  function findMedia(){
    var list = [];
    document.querySelectorAll('video').forEach(function(v){
      try {
        var source = v.querySelector('source');
        var src = v.currentSrc || v.src || (source && source.src);
        if (src && src.match(/\.mp4(\?|$)/i)) {
          list.push({url: src, title: (v.getAttribute('title') || document.title || 'video')});
        }
      } catch(e){}
    });
    document.querySelectorAll('a').forEach(function(a){
      try {
        var h = a.href;
        if (h && h.match(/\.mp4(\?|$)/i)) {
          list.push({url: h, title: (a.innerText || '').trim() || document.title});
        }
      } catch(e){}
    });
    var uniq = [];
    var seen = new Set();
    list.forEach(function(it){
      if (!seen.has(it.url)) { seen.add(it.url); uniq.push(it); }
    });
    parent.postMessage({type: '%(message_type)s', items: uniq}, '*');
  }

  findMedia();
  setTimeout(findMedia, %(delay)d);
  var obs = new MutationObserver(findMedia);
  try { obs.observe(document.body || document.documentElement, {childList: true, subtree: true}); } catch(e){}
})();
""" % {'message_type': MESSAGE_TYPE, 'delay': RESCAN_DELAY_MS}
